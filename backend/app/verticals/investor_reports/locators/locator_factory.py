"""Factory for selecting a table locator strategy by name."""

from typing import List

from app.utils.logging import logger
from app.verticals.investor_reports.layout_config import LayoutConfig
from .anchor_locator import AnchorTableLocator
from .base import TableLocator
from .manifest_locator import ManifestTableLocator


class TableLocatorFactory:
    """Factory for creating table locators.

    Maps strategy names to locator classes.
    """

    # Registry of locators by strategy name
    _LOCATOR_REGISTRY = {
        "anchor": AnchorTableLocator,
        "manifest": ManifestTableLocator,
    }

    @classmethod
    def get_locator(cls, strategy: str, config: LayoutConfig = None) -> TableLocator:
        """Get the locator for a strategy.

        Args:
            strategy: Strategy name ('anchor' or 'manifest')
            config: Engine configuration

        Returns:
            TableLocator instance

        Raises:
            ValueError: If the strategy is unknown
        """
        locator_class = cls._LOCATOR_REGISTRY.get(strategy)
        if not locator_class:
            raise ValueError(
                f"Unknown table locator '{strategy}'. Available: {', '.join(cls.available())}"
            )

        logger.info(f"Using table locator: {locator_class.__name__}")
        return locator_class(config)

    @classmethod
    def available(cls) -> List[str]:
        return sorted(cls._LOCATOR_REGISTRY)

    @classmethod
    def register_locator(cls, strategy: str, locator_class: type) -> None:
        """Register a new locator (for extensions/testing)."""
        cls._LOCATOR_REGISTRY[strategy] = locator_class
        logger.info(f"Registered table locator {locator_class.__name__} as '{strategy}'")
