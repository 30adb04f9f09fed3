"""Base engine interface."""

from abc import ABC, abstractmethod
from typing import Any

ComponentPair = tuple[str, str]


class BaseEngine(ABC):
    """Abstract base class for address engines.

    An engine must be set up once before any parse or expand call and torn
    down once when the process is done with it.
    """

    name: str = "base"

    @abstractmethod
    def setup(self) -> None:
        """Load the engine's models and data."""
        pass

    @abstractmethod
    def teardown(self) -> None:
        """Release the engine's models and data."""
        pass

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True between a successful setup() and teardown()."""
        pass

    @abstractmethod
    def parse(self, text: str, options: Any = None) -> list[ComponentPair]:
        """Parse one address.

        Args:
            text: Address text (never None)
            options: Value returned by parser_options()

        Returns:
            Unordered (label, value) pairs
        """
        pass

    @abstractmethod
    def expand(self, text: str, options: Any = None) -> list[str]:
        """Expand one address into normalized variants, best first.

        Args:
            text: Address text (never None)
            options: Value returned by expand_options()

        Returns:
            Candidate strings, possibly empty
        """
        pass

    def parser_options(self) -> Any:
        """Return the options handle shared by every parse call in a batch."""
        return None

    def expand_options(self) -> Any:
        """Return the options handle shared by every expand call in a batch."""
        return None
