"""addr-lens: Batch parsing, normalization and editing of postal addresses."""

from addr_lens.core import get_component, normalize_addr, parse_addr, set_component
from addr_lens.engines import get_engine, setup, teardown
from addr_lens.schema import COMPONENT_COLUMNS, ComponentField, ParsedComponents

__version__ = "0.1.0"

__all__ = [
    "normalize_addr",
    "parse_addr",
    "get_component",
    "set_component",
    "setup",
    "teardown",
    "get_engine",
    "ComponentField",
    "ParsedComponents",
    "COMPONENT_COLUMNS",
    "__version__",
]
