"""Errors raised by the investor report engine."""


class ReportInputError(ValueError):
    """Input workbook is missing something the batch cannot run without.

    Examples: the manifest sheet or its header columns are absent, or the
    uploaded file is not a readable workbook. Aborts the whole batch.
    """
