"""The build-in-progress: one optional component per category."""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, model_validator

from rigcheck.models.components import Component, ComponentCategory


class Selection(BaseModel):
    """Current build selection.

    Owned by the caller (builder UI / session state). Every operation
    that changes a slot returns a new Selection; the engine only reads it.
    """

    cpu: Optional[Component] = None
    gpu: Optional[Component] = None
    motherboard: Optional[Component] = None
    ram: Optional[Component] = None
    storage: Optional[Component] = None
    psu: Optional[Component] = None
    case: Optional[Component] = None
    cooling: Optional[Component] = None

    @model_validator(mode="after")
    def _validate_slot_categories(self) -> "Selection":
        for category in ComponentCategory:
            component = getattr(self, category.value)
            if component is not None and component.category != category:
                raise ValueError(
                    f"{component.title} is a {component.category.value} "
                    f"component and cannot fill the {category.value} slot"
                )
        return self

    def get(self, category: Union[ComponentCategory, str]) -> Optional[Component]:
        """Return the component in the given slot, or None."""
        return getattr(self, ComponentCategory(category).value)

    def selected(self) -> List[Component]:
        """Selected components in slot order."""
        return [
            c for c in (self.get(category) for category in ComponentCategory)
            if c is not None
        ]

    @property
    def completion_count(self) -> int:
        """Number of filled slots."""
        return len(self.selected())

    def with_component(
        self, category: Union[ComponentCategory, str], component: Component
    ) -> "Selection":
        """Return a copy with ``component`` placed in ``category``'s slot."""
        category = ComponentCategory(category)
        if component.category != category:
            raise ValueError(
                f"{component.title} is a {component.category.value} "
                f"component and cannot fill the {category.value} slot"
            )
        return self.model_copy(update={category.value: component})

    def without(self, category: Union[ComponentCategory, str]) -> "Selection":
        """Return a copy with the given slot cleared."""
        return self.model_copy(update={ComponentCategory(category).value: None})
