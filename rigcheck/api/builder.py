"""Builder API — compatibility checks for the interactive PC builder.

Routes under /builder/*. Unauthenticated: the builder frontend calls
these after every add/remove to refresh its badges.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from rigcheck.engine.compatibility import (
    CompatibilityResult,
    check_component_compatibility,
    evaluate,
)
from rigcheck.engine.summary import summarize
from rigcheck.models.build import Selection
from rigcheck.models.components import Component, ComponentCategory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/builder", tags=["Builder"])


class ProbeRequest(BaseModel):
    """A candidate component to test against the current selection."""

    category: ComponentCategory
    component: Component
    selection: Selection = Field(default_factory=Selection)


def _result_to_dict(result: CompatibilityResult) -> dict:
    return {
        "compatible": result.is_compatible,
        "errors": [i.to_dict() for i in result.errors],
        "warnings": [i.to_dict() for i in result.warnings],
    }


# ──────────────────────────────────────────────
# Routes
# ──────────────────────────────────────────────


@router.get("/health")
async def health():
    """Health check for frontend monitoring."""
    return {
        "status": "healthy",
        "categories": [c.value for c in ComponentCategory],
    }


@router.post("/compatibility/check")
async def check_selection(selection: Selection):
    """Evaluate every compatibility rule against the current selection."""
    result = evaluate(selection)
    logger.info(
        "Compatibility check: %d components, compatible=%s, %d issues",
        selection.completion_count, result.is_compatible, result.issue_count,
    )
    return _result_to_dict(result)


@router.post("/compatibility/probe")
async def probe_component(request: ProbeRequest):
    """Check one candidate before adding it to the build.

    Socket and form-factor fit only — use /compatibility/check for
    the full rule set.
    """
    probe = check_component_compatibility(
        request.category, request.component, request.selection
    )
    if not probe.compatible:
        logger.info(
            "Probe rejected %s for %s: %s",
            request.component.title, request.category.value, probe.reason,
        )
    return {"compatible": probe.compatible, "reason": probe.reason}


@router.post("/summary")
async def build_summary(selection: Selection):
    """Price/power totals plus the compatibility flag for the summary panel."""
    summary = summarize(selection)
    result = evaluate(selection)
    data = summary.to_dict()
    data["compatible"] = result.is_compatible
    data["issue_count"] = result.issue_count
    return data
