"""Engine Registry — Maps driver names to search engine classes and instances.

The registry is where drivers are registered and where the configured
driver is created, initialized and later shut down.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from indexsync.engines.base.engine import SearchEngine
from indexsync.engines.base.exceptions import EngineNotFoundError

if TYPE_CHECKING:
    from indexsync.config.settings import Settings

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Registry of search engine drivers.

    Example:
        >>> registry = EngineRegistry()
        >>> registry.register("algolia", AlgoliaEngine)
        >>> await registry.initialize_engine("algolia", app_id="...", api_key="...")
        >>> engine = registry.get("algolia")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[SearchEngine]] = {}
        self._instances: dict[str, SearchEngine] = {}
        self._default: str | None = None

    @classmethod
    async def from_settings(cls, settings: Settings) -> EngineRegistry:
        """Create a registry with the built-in drivers and initialize the configured one.

        Args:
            settings: Application settings; ``settings.search.driver`` picks the driver.

        Returns:
            Registry whose default engine is the configured driver.
        """
        from indexsync.engines.algolia.engine import AlgoliaEngine
        from indexsync.engines.null.engine import NullEngine

        registry = cls()
        registry.register("algolia", AlgoliaEngine)
        registry.register("null", NullEngine)

        driver = settings.search.driver
        kwargs: dict[str, Any] = {}
        if driver == "algolia":
            kwargs = {
                "app_id": settings.algolia.app_id,
                "api_key": settings.algolia.api_key,
                "soft_delete": settings.search.soft_delete,
            }

        await registry.initialize_engine(driver, **kwargs)
        registry._default = driver
        return registry

    def register(self, name: str, engine_class: type[SearchEngine]) -> None:
        """Register an engine class under a driver name."""
        if name in self._classes:
            logger.warning("Overwriting existing engine registration: %s", name)
        self._classes[name] = engine_class
        logger.debug("Registered engine: %s", name)

    async def initialize_engine(self, name: str, **kwargs: Any) -> SearchEngine:
        """Create and initialize an engine instance.

        Args:
            name: The registered driver name.
            **kwargs: Constructor arguments for the engine class.

        Raises:
            EngineNotFoundError: If no engine is registered under this name.
        """
        if name not in self._classes:
            raise EngineNotFoundError(
                f"No engine registered with name '{name}'. "
                f"Available engines: {list(self._classes.keys())}"
            )

        engine = self._classes[name](**kwargs)
        await engine.initialize()
        self._instances[name] = engine
        logger.info("Initialized engine: %s", name)
        return engine

    def get(self, name: str) -> SearchEngine:
        """Get an initialized engine by driver name.

        Raises:
            EngineNotFoundError: If the engine is not initialized.
        """
        if name not in self._instances:
            raise EngineNotFoundError(f"Engine '{name}' is not initialized. Call initialize_engine() first.")
        return self._instances[name]

    def get_default(self) -> SearchEngine:
        """Get the configured driver, or the first initialized engine.

        Raises:
            EngineNotFoundError: If no engines are initialized.
        """
        if self._default in self._instances:
            return self._instances[self._default]
        if not self._instances:
            raise EngineNotFoundError("No engines are initialized.")
        return next(iter(self._instances.values()))

    async def shutdown_all(self) -> None:
        """Shut down every initialized engine, logging (not raising) failures."""
        for name, engine in self._instances.items():
            try:
                await engine.shutdown()
                logger.info("Shut down engine: %s", name)
            except Exception:
                logger.warning("Error shutting down engine: %s", name, exc_info=True)
        self._instances.clear()

    @property
    def registered_engines(self) -> list[str]:
        return list(self._classes.keys())

    @property
    def active_engines(self) -> list[str]:
        return list(self._instances.keys())
