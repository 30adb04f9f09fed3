"""Address engines and the process-wide engine lifecycle."""

from __future__ import annotations

import logging

from addr_lens.config import EngineConfig
from addr_lens.engines.base import BaseEngine
from addr_lens.engines.libpostal import ExpandOptions, LibpostalEngine, ParserOptions
from addr_lens.exceptions import EngineNotInitializedError

logger = logging.getLogger(__name__)

_active_engine: BaseEngine | None = None


def _build_engine(config: EngineConfig) -> BaseEngine:
    if config.engine == "libpostal":
        return LibpostalEngine(config=config)
    raise ValueError(f"Unsupported engine: {config.engine}")


def setup(engine: BaseEngine | None = None, *, config: EngineConfig | None = None) -> BaseEngine:
    """Set up an engine and make it the default for all batch operations.

    Must be called once before normalize/parse/get/set unless an engine is
    passed to those calls explicitly.

    Args:
        engine: Engine to install. Built from config when omitted.
        config: Engine configuration. Defaults to EngineConfig.from_env().

    Returns:
        The active engine.
    """
    global _active_engine
    if engine is None:
        engine = _build_engine(config or EngineConfig.from_env())
    engine.setup()
    if _active_engine is not None and _active_engine is not engine:
        _active_engine.teardown()
    _active_engine = engine
    logger.info("active address engine: %s", engine.name)
    return engine


def teardown() -> None:
    """Tear down the active engine, if any."""
    global _active_engine
    if _active_engine is None:
        return
    engine, _active_engine = _active_engine, None
    engine.teardown()


def get_engine() -> BaseEngine:
    """Return the active engine.

    Raises:
        EngineNotInitializedError: If setup() has not been called.
    """
    if _active_engine is None or not _active_engine.is_ready:
        raise EngineNotInitializedError(
            "No address engine is set up. Call addr_lens.setup() first."
        )
    return _active_engine


__all__ = [
    "BaseEngine",
    "ExpandOptions",
    "LibpostalEngine",
    "ParserOptions",
    "get_engine",
    "setup",
    "teardown",
]
