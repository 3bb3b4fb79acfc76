"""Value types and pydantic models for the geocoding proxy responses.

All response models use ``extra="ignore"`` so provider-specific fields the
proxy passes through (``place_id``, ``boundingbox``, ``importance`` ...) are
dropped rather than rejected.

Coordinate fields are validated as finite floats inside the WGS84 ranges.
Nominatim serialises ``lat``/``lon`` as strings (``"17.4435"``); pydantic's
lax mode coerces those to floats.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LAT_MIN, LAT_MAX = -90.0, 90.0
LNG_MIN, LNG_MAX = -180.0, 180.0


class Coordinates(NamedTuple):
    """An immutable ``(lat, lng)`` pair in WGS84 degrees."""

    lat: float
    lng: float


def in_range(lat: float, lng: float) -> bool:
    """Return True if *lat*/*lng* fall inside the WGS84 latitude/longitude ranges."""
    return LAT_MIN <= lat <= LAT_MAX and LNG_MIN <= lng <= LNG_MAX


# ---------------------------------------------------------------------------
# Proxy response models
# ---------------------------------------------------------------------------


class ForwardCandidate(BaseModel):
    """One element of the JSON array returned by the forward endpoint."""

    model_config = ConfigDict(extra="ignore")

    lat: float = Field(ge=LAT_MIN, le=LAT_MAX, allow_inf_nan=False)
    lon: float = Field(ge=LNG_MIN, le=LNG_MAX, allow_inf_nan=False)
    display_name: Optional[str] = None

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        # JSON true/false would otherwise coerce to 1.0/0.0.
        if isinstance(value, bool):
            raise ValueError("coordinate must be a number or numeric string")
        return value

    def coordinates(self) -> Coordinates:
        return Coordinates(self.lat, self.lon)


class ReverseResult(BaseModel):
    """JSON object returned by the reverse endpoint."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    display_name: str = Field(min_length=1)
