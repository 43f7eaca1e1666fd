"""Investor report engine.

Finds per-investor tables inside a workbook, renders each to a styled A4
PDF and merges them into one document per investor.
"""
