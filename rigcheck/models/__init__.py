"""Pydantic models for components and build selections."""

from rigcheck.models.build import Selection
from rigcheck.models.components import (
    Component,
    ComponentCategory,
    ComponentSpecifications,
)

__all__ = [
    # Components & enums
    "Component",
    "ComponentCategory",
    "ComponentSpecifications",
    # Build models
    "Selection",
]
