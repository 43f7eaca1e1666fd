"""Table locator strategies."""

from .anchor_locator import AnchorTableLocator
from .base import TableLocator
from .locator_factory import TableLocatorFactory
from .manifest_locator import ManifestTableLocator

__all__ = [
    "AnchorTableLocator",
    "ManifestTableLocator",
    "TableLocator",
    "TableLocatorFactory",
]
