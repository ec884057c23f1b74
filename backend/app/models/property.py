"""Property description model

Input record for habitability evaluation. Wire format is camelCase (the
frontend and stored cases use it); Python attributes are snake_case.
Optional fields are None when not measured/stated, never 0 or False.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PropertyType(str, Enum):
    """Dwelling type"""

    FLAT = "flat"
    HOUSE = "house"
    STUDIO = "studio"
    OTHER = "other"


class UseCase(str, Enum):
    """Occupancy scenario (selects the minimum area threshold)"""

    FIRST_OCCUPANCY = "primera-ocupacion"
    SECOND_OCCUPANCY = "segunda-ocupacion"
    RENOVATION = "renovation"


class PropertyInput(BaseModel):
    """One residential unit as described by the user"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    # Identity / location
    municipality: str
    region: str
    address: str | None = None

    # Classification
    property_type: PropertyType
    use_case: str  # UseCase value; unknown values fall back to the stricter threshold

    # Measurements
    useful_area: float | None = None  # m²
    total_area: float | None = None  # m²
    ceiling_height: float | None = None  # m
    num_rooms: int | None = None
    num_bedrooms: int | None = None
    num_bathrooms: int | None = None
    num_floors: int | None = None
    year_built: int | None = None
    intended_occupancy: int | None = None  # people

    # Core facilities (always answered)
    has_kitchen: bool
    has_bathroom: bool
    has_natural_light: bool
    has_ventilation: bool
    has_heating: bool

    # Detailed facilities (None = not stated)
    has_running_water: bool | None = None
    has_hot_water: bool | None = None
    has_drainage: bool | None = None
    has_wc: bool | None = Field(default=None, alias="hasWC")
    has_shower_or_bath: bool | None = None
    has_cooking_appliance: bool | None = None
    has_electrical_installation: bool | None = None
    has_energy_certificate: bool | None = None
    has_gas: bool | None = None
    has_gas_installation: bool | None = None

    notes: str | None = None

    def get_field(self, wire_name: str):
        """Value of a field by its wire (camelCase) name"""
        return getattr(self, _ATTR_BY_WIRE_NAME[wire_name])

    def is_present(self, wire_name: str) -> bool:
        return self.get_field(wire_name) is not None

    def to_wire(self) -> dict:
        """camelCase dict without absent fields (keeps absent distinct from false/0)"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


_ATTR_BY_WIRE_NAME: dict[str, str] = {
    (info.alias or name): name for name, info in PropertyInput.model_fields.items()
}
