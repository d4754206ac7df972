"""Build summary — price and power totals shown next to the builder."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict

from rigcheck.engine.compatibility import LOW_HEADROOM_PERCENT, get_total_power
from rigcheck.models.build import Selection
from rigcheck.models.components import ComponentCategory

TOTAL_SLOTS = len(ComponentCategory)


class PowerStatus(str, Enum):
    """Traffic-light state of the power budget."""

    NEUTRAL = "neutral"  # no PSU rating to compare against
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"


@dataclass
class BuildSummary:
    total_price: float
    total_power: float
    psu_wattage: float
    completion_count: int
    total_slots: int
    power_headroom_percent: float
    power_load_percent: float
    power_status: PowerStatus

    @property
    def is_complete(self) -> bool:
        return self.completion_count == self.total_slots

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["power_status"] = self.power_status.value
        data["is_complete"] = self.is_complete
        return data


def get_total_price(selection: Selection) -> float:
    return sum(c.price or 0 for c in selection.selected())


def get_psu_wattage(selection: Selection) -> float:
    """Rating of the selected PSU, 0 when none is selected or it is unrated."""
    if selection.psu is None:
        return 0
    return selection.psu.psu_wattage or 0


def get_power_status(total_power: float, psu_wattage: float) -> PowerStatus:
    if psu_wattage <= 0:
        return PowerStatus.NEUTRAL
    if total_power > psu_wattage:
        return PowerStatus.DANGER
    headroom = (psu_wattage - total_power) / psu_wattage * 100
    if headroom < LOW_HEADROOM_PERCENT:
        return PowerStatus.WARNING
    return PowerStatus.GOOD


def summarize(selection: Selection) -> BuildSummary:
    """Aggregate totals for the current selection."""
    total_power = get_total_power(selection)
    psu_wattage = get_psu_wattage(selection)

    if psu_wattage > 0:
        headroom = (psu_wattage - total_power) / psu_wattage * 100
        load = min(total_power / psu_wattage * 100, 100.0)
    else:
        headroom = 0.0
        load = 0.0

    return BuildSummary(
        total_price=get_total_price(selection),
        total_power=total_power,
        psu_wattage=psu_wattage,
        completion_count=selection.completion_count,
        total_slots=TOTAL_SLOTS,
        power_headroom_percent=headroom,
        power_load_percent=load,
        power_status=get_power_status(total_power, psu_wattage),
    )
