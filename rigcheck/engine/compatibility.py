"""Hardware compatibility rules for an in-progress PC build.

Errors are hard incompatibilities (the build would not physically or
electrically work). Warnings are soft risks (it works, but is fragile or
suboptimal). Every rule runs on every call; none short-circuits another.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from rigcheck.engine.notes import parse_psu_recommendation
from rigcheck.models.build import Selection
from rigcheck.models.components import Component, ComponentCategory

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────
# Thresholds
# ──────────────────────────────────────────────

LOW_HEADROOM_PERCENT = 20
HIGH_POWER_GPU_WATTS = 300
RECOMMENDED_HIGH_POWER_PSU_WATTS = 850


# ──────────────────────────────────────────────
# Result Types
# ──────────────────────────────────────────────


class Severity(str, Enum):
    """How serious a compatibility finding is."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class Issue:
    """A single compatibility finding."""

    severity: Severity
    title: str
    description: str
    affected_components: List[ComponentCategory] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.severity.value,
            "title": self.title,
            "description": self.description,
            "affected_components": [c.value for c in self.affected_components],
        }


@dataclass
class CompatibilityResult:
    """Result of a full compatibility evaluation.

    Order within ``errors`` and ``warnings`` follows rule order only; it
    carries no priority.
    """

    is_compatible: bool
    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return len(self.errors) + len(self.warnings)


@dataclass
class ProbeResult:
    """Outcome of checking one candidate against the current selection."""

    compatible: bool
    reason: Optional[str] = None


# ──────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _watts(value: float) -> str:
    """Format a wattage without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value}"


def _socket_label(socket: Optional[str]) -> str:
    return socket if socket else "unknown"


def get_total_power(selection: Selection) -> float:
    """Summed draw of every selected component, PSU included."""
    return sum(c.power_requirement or 0 for c in selection.selected())


def _serialize_spec_block(block: Dict[str, Any]) -> str:
    """Flatten an opaque spec block into lower-cased text for token search."""
    return json.dumps(block, default=str).lower()


# ──────────────────────────────────────────────
# Individual Rule Checkers
# ──────────────────────────────────────────────


def check_cpu_motherboard_socket(
    cpu: Component, motherboard: Component
) -> Optional[Issue]:
    """RULE 1: CPU.socket == Motherboard.socket (exact, case-sensitive)."""
    if cpu.socket_type == motherboard.socket_type:
        return None

    return Issue(
        severity=Severity.ERROR,
        title="Socket Mismatch",
        description=(
            f"{cpu.title} uses {_socket_label(cpu.socket_type)} socket, but "
            f"{motherboard.title} has {_socket_label(motherboard.socket_type)} "
            f"socket. These are not compatible."
        ),
        affected_components=[ComponentCategory.CPU, ComponentCategory.MOTHERBOARD],
    )


def check_motherboard_case_form_factor(
    motherboard: Component, case: Component
) -> Optional[Issue]:
    """RULE 2: Motherboard.form_factor IN Case.supported_form_factors"""
    mobo_ff = motherboard.form_factor
    supported = case.supported_form_factors or []

    if not mobo_ff:
        return None  # Nothing to compare

    if mobo_ff in supported:
        return None

    return Issue(
        severity=Severity.ERROR,
        title="Form Factor Mismatch",
        description=(
            f"{motherboard.title} is {mobo_ff}, but {case.title} "
            f"only supports {', '.join(supported)}."
        ),
        affected_components=[ComponentCategory.MOTHERBOARD, ComponentCategory.CASE],
    )


def check_power_budget(selection: Selection, psu: Component) -> Optional[Issue]:
    """RULE 3: total draw of every selected part vs. PSU rating.

    An overdraw is an error; less than 20% spare capacity is a warning.
    """
    total_power = get_total_power(selection)
    psu_wattage = psu.psu_wattage or 0

    if total_power > psu_wattage:
        return Issue(
            severity=Severity.ERROR,
            title="Insufficient Power",
            description=(
                f"Your build requires approximately "
                f"{_round_half_up(total_power)}W, but your PSU only provides "
                f"{_watts(psu_wattage)}W. You need a higher wattage power supply."
            ),
            affected_components=[ComponentCategory.PSU],
        )

    if psu_wattage <= 0:
        return None  # 0W supply with 0W draw: headroom is undefined

    headroom_percent = (psu_wattage - total_power) / psu_wattage * 100
    if headroom_percent < LOW_HEADROOM_PERCENT:
        return Issue(
            severity=Severity.WARNING,
            title="Low Power Headroom",
            description=(
                f"Your build uses {_watts(total_power)}W with a "
                f"{_watts(psu_wattage)}W PSU "
                f"({_round_half_up(headroom_percent)}% headroom). Consider a "
                f"higher wattage PSU for better efficiency and future upgrades."
            ),
            affected_components=[ComponentCategory.PSU],
        )
    return None


def check_high_power_gpu_without_psu(gpu: Component) -> Optional[Issue]:
    """RULE 4: warn early when a power-hungry GPU has no PSU picked yet."""
    draw = gpu.power_requirement or 0
    if draw < HIGH_POWER_GPU_WATTS:
        return None

    return Issue(
        severity=Severity.WARNING,
        title="High-Power GPU Needs Strong PSU",
        description=(
            f"{gpu.title} requires {_watts(draw)}W. Make sure to select a PSU "
            f"with at least {RECOMMENDED_HIGH_POWER_PSU_WATTS}W for this GPU."
        ),
        affected_components=[ComponentCategory.GPU, ComponentCategory.PSU],
    )


def check_psu_recommendation(
    component: Component, psu: Component
) -> Optional[Issue]:
    """RULE 5: PSU rating vs. a wattage recommended in a compatibility note."""
    recommended = parse_psu_recommendation(component.compatibility_notes)
    if recommended is None:
        return None

    psu_wattage = psu.psu_wattage or 0
    if psu_wattage >= recommended:
        return None

    return Issue(
        severity=Severity.WARNING,
        title="PSU Recommendation",
        description=(
            f"{component.title} recommends at least a {recommended}W PSU. "
            f"Your selected PSU is {_watts(psu_wattage)}W."
        ),
        affected_components=[component.category, ComponentCategory.PSU],
    )


def check_ram_motherboard_type(
    ram: Component, motherboard: Component
) -> Optional[Issue]:
    """RULE 6: RAM generation vs. what the motherboard's spec text mentions.

    The motherboard's ``advanced`` block is serialized and scanned for the
    literal ``ddr4`` / ``ddr5`` tokens. This is a heuristic: a board whose
    text mentions DDR5 in an unrelated field reads as DDR5-capable.
    """
    board_block = motherboard.specifications.advanced
    if board_block is None:
        return None

    ram_block = ram.specifications.intermediate or {}
    ram_type_raw = ram_block.get("Type")
    if ram_type_raw is None or ram_type_raw == "":
        return None

    ram_type = str(ram_type_raw).lower()
    board_text = _serialize_spec_block(board_block)

    if "ddr5" in ram_type and "ddr5" not in board_text:
        ram_gen, board_gen = "DDR5", "DDR4"
    elif "ddr4" in ram_type and "ddr5" in board_text and "ddr4" not in board_text:
        ram_gen, board_gen = "DDR4", "DDR5"
    else:
        return None  # Dual-capable, or not enough data to decide

    return Issue(
        severity=Severity.ERROR,
        title="RAM Type Mismatch",
        description=(
            f"{ram.title} is {ram_gen} memory, but {motherboard.title} "
            f"only supports {board_gen}."
        ),
        affected_components=[ComponentCategory.RAM, ComponentCategory.MOTHERBOARD],
    )


# ──────────────────────────────────────────────
# Main Compatibility Check
# ──────────────────────────────────────────────


def evaluate(selection: Selection) -> CompatibilityResult:
    """Run every compatibility rule against the current selection.

    Pure: the selection is only read, and the same selection always
    produces an equal result. An empty selection is compatible.
    """
    issues: List[Issue] = []

    cpu = selection.cpu
    gpu = selection.gpu
    motherboard = selection.motherboard
    ram = selection.ram
    psu = selection.psu
    case = selection.case

    # Rule 1: CPU ↔ Motherboard socket
    if cpu and motherboard:
        issue = check_cpu_motherboard_socket(cpu, motherboard)
        if issue:
            issues.append(issue)

    # Rule 2: Motherboard form factor ↔ Case support
    if motherboard and case:
        issue = check_motherboard_case_form_factor(motherboard, case)
        if issue:
            issues.append(issue)

    # Rule 3: Total draw vs. PSU rating
    if psu:
        issue = check_power_budget(selection, psu)
        if issue:
            issues.append(issue)

    # Rule 4: High-draw GPU with no PSU yet
    if gpu and not psu:
        issue = check_high_power_gpu_without_psu(gpu)
        if issue:
            issues.append(issue)

    # Rule 5: PSU advice embedded in notes
    if psu:
        for component in selection.selected():
            issue = check_psu_recommendation(component, psu)
            if issue:
                issues.append(issue)

    # Rule 6: RAM generation ↔ Motherboard
    if ram and motherboard:
        issue = check_ram_motherboard_type(ram, motherboard)
        if issue:
            issues.append(issue)

    errors = [i for i in issues if i.severity == Severity.ERROR]
    warnings = [i for i in issues if i.severity == Severity.WARNING]

    logger.debug(
        "Compatibility evaluated: %d components, %d errors, %d warnings",
        selection.completion_count, len(errors), len(warnings),
    )

    return CompatibilityResult(
        is_compatible=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def check_component_compatibility(
    category: Union[ComponentCategory, str],
    candidate: Component,
    selection: Selection,
) -> ProbeResult:
    """Quick pre-check before placing ``candidate`` into ``category``.

    Covers socket and form-factor fit only; power and RAM generation are
    left to ``evaluate``. The first failing check wins.
    """
    category = ComponentCategory(category)

    if category == ComponentCategory.CPU:
        board = selection.motherboard
        if board and candidate.socket_type != board.socket_type:
            return ProbeResult(
                compatible=False,
                reason=(
                    f"Socket {_socket_label(candidate.socket_type)} doesn't match "
                    f"motherboard socket {_socket_label(board.socket_type)}"
                ),
            )

    elif category == ComponentCategory.MOTHERBOARD:
        cpu = selection.cpu
        if cpu and candidate.socket_type != cpu.socket_type:
            return ProbeResult(
                compatible=False,
                reason=(
                    f"Socket {_socket_label(candidate.socket_type)} doesn't match "
                    f"CPU socket {_socket_label(cpu.socket_type)}"
                ),
            )
        case = selection.case
        if case and candidate.form_factor:
            if candidate.form_factor not in (case.supported_form_factors or []):
                return ProbeResult(
                    compatible=False,
                    reason=(
                        f"{candidate.form_factor} form factor doesn't fit "
                        f"in selected case"
                    ),
                )

    return ProbeResult(compatible=True)
