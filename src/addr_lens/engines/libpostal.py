"""libpostal engine implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import import_module

from addr_lens.config import EngineConfig
from addr_lens.engines.base import BaseEngine, ComponentPair
from addr_lens.exceptions import EngineNotInitializedError, EngineSetupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserOptions:
    language: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class ExpandOptions:
    languages: tuple[str, ...] = ()


class LibpostalEngine(BaseEngine):
    """Address engine backed by the libpostal C library via pypostal."""

    name = "libpostal"

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._parse_address = None
        self._expand_address = None

    @property
    def is_ready(self) -> bool:
        return self._parse_address is not None and self._expand_address is not None

    def setup(self) -> None:
        """Load libpostal's parser, expander and language classifier.

        Raises:
            EngineSetupError: If pypostal is missing or libpostal data cannot be loaded.
        """
        if self.is_ready:
            return
        try:
            parser = import_module("postal.parser")
            expand = import_module("postal.expand")
        except Exception as exc:
            raise EngineSetupError(
                "libpostal setup failed. Install libpostal and the `postal` package "
                "and make sure the libpostal data directory is available."
            ) from exc

        self._parse_address = parser.parse_address
        self._expand_address = expand.expand_address
        logger.info("libpostal engine ready")

    def teardown(self) -> None:
        # pypostal releases the native state itself at interpreter exit.
        self._parse_address = None
        self._expand_address = None
        logger.info("libpostal engine torn down")

    def parser_options(self) -> ParserOptions:
        return ParserOptions(language=self.config.language, country=self.config.country)

    def expand_options(self) -> ExpandOptions:
        return ExpandOptions(languages=self.config.expand_languages)

    def parse(self, text: str, options: ParserOptions | None = None) -> list[ComponentPair]:
        if self._parse_address is None:
            raise EngineNotInitializedError("libpostal engine is not set up; call setup() first")
        options = options or ParserOptions()
        kwargs = {}
        if options.language:
            kwargs["language"] = options.language
        if options.country:
            kwargs["country"] = options.country
        # pypostal yields (value, label)
        return [(label, value) for value, label in self._parse_address(text, **kwargs)]

    def expand(self, text: str, options: ExpandOptions | None = None) -> list[str]:
        if self._expand_address is None:
            raise EngineNotInitializedError("libpostal engine is not set up; call setup() first")
        options = options or ExpandOptions()
        if options.languages:
            return list(self._expand_address(text, languages=list(options.languages)))
        return list(self._expand_address(text))
