"""Batch address operations: normalize, parse, get and set components."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import pandas as pd

from addr_lens.batch import CancelToken, is_missing, run_batch
from addr_lens.engines import get_engine
from addr_lens.engines.base import BaseEngine
from addr_lens.exceptions import ReplacementLengthError
from addr_lens.schema import COMPONENT_COLUMNS, LABEL_TO_FIELD, ComponentField, ParsedComponents

logger = logging.getLogger(__name__)

AddressInput = Iterable[Any]
ReplacementInput = str | None | Sequence[str | None]


def _missing(value: str | None) -> str | None:
    """Map the engine's empty-string "not found" to None."""
    if value == "":
        return None
    return value


def parse_single(text: str, engine: BaseEngine, options: Any = None) -> ParsedComponents:
    """Parse one address into the ten-field schema.

    Unrecognised labels are ignored; if a label repeats, the last value wins.
    Engine errors propagate.
    """
    values: dict[str, str | None] = {}
    for label, value in engine.parse(text, options):
        field = LABEL_TO_FIELD.get(label)
        if field is not None:
            values[field.value] = _missing(value)
    return ParsedComponents(**values)


def normalize_single(text: str, engine: BaseEngine, options: Any = None) -> str:
    """Return the engine's top-ranked expansion, or the text itself if there is none."""
    expansions = engine.expand(text, options)
    if not expansions:
        return text
    return expansions[0]


def normalize_addr(
    addresses: AddressInput,
    *,
    engine: BaseEngine | None = None,
    cancel_event: CancelToken | None = None,
) -> list[str | None]:
    """Normalize street addresses.

    Args:
        addresses: Address strings; None/NaN entries stay None.
        engine: Engine to use. Defaults to the one installed by setup().
        cancel_event: Optional cancellation token, checked every 10,000 rows.

    Returns:
        One normalized address per input row.

    Example:
        normalize_addr(["fourty seven love lane pinner"])
        # ["47 love lane pinner"]
    """
    engine = engine or get_engine()
    options = engine.expand_options()
    return run_batch(
        addresses,
        lambda text, _row: normalize_single(text, engine, options),
        cancel_event=cancel_event,
    )


def parse_addr(
    addresses: AddressInput,
    *,
    engine: BaseEngine | None = None,
    cancel_event: CancelToken | None = None,
) -> pd.DataFrame:
    """Parse street addresses into their components.

    Args:
        addresses: Address strings; None/NaN entries give an all-None row.
        engine: Engine to use. Defaults to the one installed by setup().
        cancel_event: Optional cancellation token, checked every 10,000 rows.

    Returns:
        DataFrame with the columns house, house_number, road, suburb,
        city_district, city, state_district, state, postal_code and country,
        one row per input row. Components not found are None. A pandas
        Series input keeps its index.
    """
    index = addresses.index if isinstance(addresses, pd.Series) else None
    engine = engine or get_engine()
    options = engine.parser_options()
    parsed = run_batch(
        addresses,
        lambda text, _row: parse_single(text, engine, options),
        cancel_event=cancel_event,
    )

    empty = (None,) * len(COMPONENT_COLUMNS)
    rows = [item.as_tuple() if item is not None else empty for item in parsed]
    columns = {
        column: [row[slot] for row in rows] for slot, column in enumerate(COMPONENT_COLUMNS)
    }
    return pd.DataFrame(columns, columns=list(COMPONENT_COLUMNS), index=index, dtype=object)


def get_component(
    addresses: AddressInput,
    field: ComponentField | str | int,
    *,
    engine: BaseEngine | None = None,
    cancel_event: CancelToken | None = None,
) -> list[str | None]:
    """Extract one component from each address.

    Example:
        get_component(["781 Franklin Ave Crown Heights Brooklyn NYC NY 11216 USA"], "postal_code")
        # ["11216"]
    """
    field = ComponentField.coerce(field)
    engine = engine or get_engine()
    options = engine.parser_options()
    return run_batch(
        addresses,
        lambda text, _row: parse_single(text, engine, options).get(field),
        cancel_event=cancel_event,
    )


def _replace_first(text: str, old: str, new: str) -> str:
    start = text.find(old)
    if start == -1:
        logger.debug("component %r not found verbatim in %r; row left unchanged", old, text)
        return text
    return text[:start] + new + text[start + len(old):]


def _resolve_replacement(
    replacement: ReplacementInput, size: int
) -> tuple[str | None, list[Any] | None]:
    """Split a replacement into (broadcast value, per-row values)."""
    if replacement is None or isinstance(replacement, str):
        return replacement, None
    values = list(replacement)
    if len(values) == 1:
        return values[0], None
    if len(values) != size:
        raise ReplacementLengthError(expected=size, actual=len(values))
    return None, values


def set_component(
    addresses: AddressInput,
    field: ComponentField | str | int,
    replacement: ReplacementInput,
    *,
    engine: BaseEngine | None = None,
    cancel_event: CancelToken | None = None,
) -> list[str | None]:
    """Replace one component in each address.

    The component is parsed out of each address and its first (leftmost)
    verbatim occurrence in the original text is replaced. When the same text
    appears earlier in the address, e.g. a house number repeated in a unit
    number, that earlier occurrence is the one replaced.

    Rows where the component is not found, where the parsed text does not
    occur verbatim, or whose replacement is None are returned unchanged.

    Args:
        addresses: Address strings; None/NaN entries stay None.
        field: Component to replace.
        replacement: One value for every row, or one value per row.
        engine: Engine to use. Defaults to the one installed by setup().
        cancel_event: Optional cancellation token, checked every 10,000 rows.

    Raises:
        ReplacementLengthError: If replacement is a sequence whose length is
            neither 1 nor the number of addresses. Raised before any row is
            parsed.
    """
    field = ComponentField.coerce(field)
    rows = list(addresses)
    broadcast, per_row = _resolve_replacement(replacement, len(rows))

    if per_row is None and is_missing(broadcast):
        return run_batch(rows, lambda text, _row: text, cancel_event=cancel_event)

    engine = engine or get_engine()
    options = engine.parser_options()

    def replace_row(text: str, row: int) -> str:
        new_value = broadcast if per_row is None else per_row[row]
        if is_missing(new_value):
            return text
        current = parse_single(text, engine, options).get(field)
        if current is None:
            return text
        return _replace_first(text, current, str(new_value))

    return run_batch(rows, replace_row, cancel_event=cancel_event)
