# src/thirdspace/services/summary.py
"""
Header-card values of the dashboard, computed from one Projection.

Formatting matches the UI: whole US dollars, negatives in parentheses,
percentages with one decimal, "N/A" for anything non-finite.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Literal, Optional

from thirdspace.domain.assumptions import AssumptionSet
from thirdspace.domain.projection import Projection

UtilizationStatus = Literal["on_target", "stretch", "over", "unknown"]

# Above target but still workable
STRETCH_UTILIZATION = 0.80


def fmt_currency(n: float) -> str:
    if not math.isfinite(n):
        return "N/A"
    text = f"${abs(n):,.0f}"
    return f"({text})" if n < 0 else text


def fmt_pct(n: float) -> str:
    if not math.isfinite(n):
        return "N/A"
    return f"{n * 100:.1f}%"


def break_even_label(month: Optional[int]) -> str:
    if month is not None and 0 < month <= 12:
        return f"Month {month}"
    return "Year 2+"


def utilization_status(utilization: float, target: float) -> UtilizationStatus:
    if math.isnan(utilization):
        return "unknown"
    if utilization <= target:
        return "on_target"
    if utilization <= STRETCH_UTILIZATION:
        return "stretch"
    return "over"


def build_summary(a: AssumptionSet, p: Projection) -> Dict[str, Dict[str, Any]]:
    util = p.utilization_required
    return {
        "startup_investment": {
            "value": p.total_startup,
            "display": fmt_currency(p.total_startup),
        },
        "year1_revenue": {
            "value": p.total_revenue_y1,
            "display": fmt_currency(p.total_revenue_y1),
            "margin": fmt_pct(p.margin_y1),
        },
        "year1_net_income": {
            "value": p.net_income_y1,
            "display": fmt_currency(p.net_income_y1),
            "positive": p.net_income_y1 >= 0,
        },
        "year3_cumulative": {
            "value": p.cumulative_y3,
            "display": fmt_currency(p.cumulative_y3),
            "positive": p.cumulative_y3 >= 0,
        },
        "utilization_required": {
            "value": util,
            "display": fmt_pct(util),
            "target": fmt_pct(a.utilization_target),
            "status": utilization_status(util, a.utilization_target),
        },
        "break_even": {
            "value": p.break_even_month,
            "display": break_even_label(p.break_even_month),
        },
    }
