# src/thirdspace/services/projections.py
from __future__ import annotations

import math
from dataclasses import asdict
from typing import Any, Mapping

from thirdspace.adapters.logging_utils import get_logger
from thirdspace.domain.assumptions import AssumptionSet
from thirdspace.domain.finance import project
from thirdspace.domain.projection import Projection

logger = get_logger(__name__)


def project_payload(
    data: Mapping[str, Any] | None,
    base: AssumptionSet | None = None,
) -> tuple[AssumptionSet, Projection]:
    """
    Overlay a (partial) wire payload on `base` (defaults when omitted) and
    project it. Keys missing from the payload keep the base value.
    """
    assumptions = (base or AssumptionSet()).merged(data or {})
    projection = project(assumptions)

    if not math.isfinite(projection.utilization_required):
        logger.info(
            "projection_non_finite_utilization",
            extra={"context": {"total_capacity": projection.total_capacity}},
        )
    return assumptions, projection


def json_safe_value(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: json_safe_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe_value(v) for v in value]
    return value


def projection_to_dict(projection: Projection, *, json_safe: bool = True) -> dict[str, Any]:
    """
    Plain-dict view of a Projection.

    With json_safe, inf/nan become None since JSON has no literal for them.
    """
    out = asdict(projection)
    if json_safe:
        out = json_safe_value(out)
    return out
