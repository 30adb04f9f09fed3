"""Data models for addr-lens."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ComponentField(str, Enum):
    """Address component recognised by the parser.

    Declaration order is the schema slot order used by every positional
    output. Do not reorder or renumber.
    """

    HOUSE = "house"
    HOUSE_NUMBER = "house_number"
    ROAD = "road"
    SUBURB = "suburb"
    CITY_DISTRICT = "city_district"
    CITY = "city"
    STATE_DISTRICT = "state_district"
    STATE = "state"
    POSTAL_CODE = "postal_code"
    COUNTRY = "country"

    @property
    def slot(self) -> int:
        """Schema slot of this field (0-9)."""
        return COMPONENT_FIELDS.index(self)

    @classmethod
    def coerce(cls, value: "ComponentField | str | int") -> "ComponentField":
        """Resolve a field from a member, its label, or its slot index."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unknown address component: {value!r}")
        if isinstance(value, int):
            if 0 <= value < len(COMPONENT_FIELDS):
                return COMPONENT_FIELDS[value]
            raise ValueError(f"Component index out of range: {value}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown address component: {value!r}") from None


COMPONENT_FIELDS: tuple[ComponentField, ...] = tuple(ComponentField)
COMPONENT_COLUMNS: tuple[str, ...] = tuple(field.value for field in COMPONENT_FIELDS)

# libpostal emits "postcode"; "postal_code" is kept for engines that use the column name.
LABEL_TO_FIELD: dict[str, ComponentField] = {
    **{field.value: field for field in COMPONENT_FIELDS},
    "postcode": ComponentField.POSTAL_CODE,
}


class ParsedComponents(BaseModel):
    """Parsed components of a single address. Missing components are None."""

    model_config = ConfigDict(frozen=True)

    house: str | None = None
    house_number: str | None = None
    road: str | None = None
    suburb: str | None = None
    city_district: str | None = None
    city: str | None = None
    state_district: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None

    def get(self, field: ComponentField | str | int) -> str | None:
        return getattr(self, ComponentField.coerce(field).value)

    def as_tuple(self) -> tuple[str | None, ...]:
        """Values in schema slot order; always ten entries."""
        return tuple(getattr(self, column) for column in COMPONENT_COLUMNS)
