"""Component categories and component records for RigCheck."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ──────────────────────────────────────────────
# Enums — Shared Vocabulary
# ──────────────────────────────────────────────


class ComponentCategory(str, Enum):
    """Hardware roles in a build. Declaration order is the slot order."""

    CPU = "cpu"
    GPU = "gpu"
    MOTHERBOARD = "motherboard"
    RAM = "ram"
    STORAGE = "storage"
    PSU = "psu"
    CASE = "case"
    COOLING = "cooling"


# ──────────────────────────────────────────────
# Component Data Models
# ──────────────────────────────────────────────


class ComponentSpecifications(BaseModel):
    """Specification blocks written for each experience level.

    Each block is an opaque string-keyed bag as authored in the content
    source. ``None`` means the block is absent; ``{}`` is an empty but
    present block.
    """

    model_config = ConfigDict(frozen=True)

    beginner: Optional[Dict[str, Any]] = None
    intermediate: Optional[Dict[str, Any]] = None
    advanced: Optional[Dict[str, Any]] = None


class Component(BaseModel):
    """A single purchasable hardware part.

    Built by the content adapter once per catalog fetch and treated as
    immutable value data afterwards. Accepts both snake_case and the
    camelCase keys the adapter emits (``socketType``, ``psuWattage``...).
    Numeric fields must be finite.

    Frozen against assignment only. Not hashable: list and dict fields
    make a field-wise hash unreliable, so key lookups by ``id`` instead.
    """

    __hash__ = None

    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=False,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    title: str
    category: ComponentCategory
    brand: str = ""
    price: float = Field(default=0, ge=0)
    power_requirement: float = Field(default=0, ge=0, description="Draw in watts")

    socket_type: Optional[str] = None
    form_factor: Optional[str] = None

    # Case only
    supported_form_factors: Optional[List[str]] = None

    # PSU only
    psu_wattage: Optional[float] = Field(default=None, ge=0)

    # Free text, e.g. "requires 650W PSU"
    compatibility_notes: Optional[str] = None

    specifications: ComponentSpecifications = Field(
        default_factory=ComponentSpecifications
    )
