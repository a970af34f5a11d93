# src/thirdspace/domain/finance.py
"""
Projection engine for the studio model.

`project(assumptions)` is pure: it reads an AssumptionSet and returns a fresh
Projection. Nothing is cached and nothing raises; a zero capacity or zero
revenue shows up as inf/nan in the ratios, exactly like the dashboard.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from thirdspace.domain.assumptions import AssumptionSet
from thirdspace.domain.projection import (
    CapacityAnalysis,
    ConversionScenario,
    CostItem,
    MarketSizing,
    MonthRow,
    Projection,
    RevenueSlice,
    UtilizationScenario,
    YearSummary,
)

MONTHS_PER_YEAR = 12
WEEKS_PER_MONTH = 4.33

# Year-1 ramp per revenue family (annual average while the studio fills up)
ANNUAL_RAMP: Dict[str, float] = {
    "membership": 0.83,
    "hourly": 0.85,
    "events": 0.85,
    "ancillary": 0.80,
}

# Month-by-month ramp used for the cash-flow chart. Applied to every family
# alike, so the 12-month sum does not match the ANNUAL_RAMP totals.
MONTHLY_RAMP: Sequence[float] = (0.5, 0.6, 0.7, 0.8, 0.85, 0.9, 0.95, 1.0, 1.0, 1.0, 1.0, 1.0)
MONTH_NAMES: Sequence[str] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Expense inflation relative to year 1
FIXED_COST_ESCALATION = {2: 1.03, 3: 1.06}
STAFFING_ESCALATION = {2: 1.10, 3: 1.18}

# Capacity rules
ROOM_BUFFER = 0.15           # turnover / maintenance, applied after lockout
CONTROL_ROOM_LOCKOUT = 6.0   # hours per month

# Monthly hour allowance per member tier
MEMBER_HOURS = {"student": 4.0, "artist": 6.0, "pro": 8.0}
RECORDING_HOUR_WEIGHT = 3.0
# Room hours consumed per event
EVENT_HOURS = {"streaming": 4.0, "showcase": 5.0, "corporate": 6.0}

# (utilization, blended hourly price) points for the revenue-potential chart
UTILIZATION_PRICE_POINTS: Sequence[tuple[float, float]] = ((0.40, 45.0), (0.55, 50.0), (0.70, 55.0), (0.85, 60.0))
# Only this level is ever flagged as current, within +/- CURRENT_BAND of required
CURRENT_UTILIZATION_LEVEL = 0.55
CURRENT_BAND = 0.1

CONVERSION_SCENARIOS_PCT: Sequence[float] = (0.5, 1.0, 1.2, 1.5, 2.0, 2.5, 3.0)

FAMILY_LABELS = {
    "membership": "Membership",
    "hourly": "Hourly Services",
    "events": "Events",
    "ancillary": "Ancillary",
}


@dataclass(frozen=True)
class RevenueLine:
    """One priced item: value x count per month, optionally a retained share."""
    value: float
    count: float
    growth: float
    share: float = 1.0

    @property
    def monthly(self) -> float:
        return self.value * self.count * self.share


LineModifier = Callable[[RevenueLine], float]


def _full_rate(line: RevenueLine) -> float:
    return line.monthly


def _grown(years: int) -> LineModifier:
    def _apply(line: RevenueLine) -> float:
        factor = 1.0
        for _ in range(years):
            factor *= 1 + line.growth
        return line.monthly * factor

    return _apply


def _sum(values: Sequence[float]) -> float:
    # left-to-right, starting from the first term (no implicit 0 + ...)
    total = values[0]
    for v in values[1:]:
        total += v
    return total


def family_total(lines: Sequence[RevenueLine], modifier: LineModifier = _full_rate) -> float:
    """Monthly total of a revenue family with `modifier` applied per line."""
    return _sum([modifier(line) for line in lines])


def revenue_families(a: AssumptionSet) -> Dict[str, List[RevenueLine]]:
    return {
        "membership": [
            RevenueLine(a.student_fee, a.student_members, a.student_growth),
            RevenueLine(a.artist_fee, a.artist_members, a.artist_growth),
            RevenueLine(a.pro_fee, a.pro_members, a.pro_growth),
        ],
        "hourly": [
            RevenueLine(a.rehearsal_rate, a.rehearsal_hours, a.rehearsal_growth),
            RevenueLine(a.recording_rate, a.recording_hours, a.recording_growth),
            RevenueLine(a.lesson_rate, a.lesson_hours, a.lesson_growth, share=a.lesson_commission),
        ],
        "events": [
            RevenueLine(a.streaming_rate, a.streaming_events, a.streaming_growth),
            RevenueLine(a.showcase_rate, a.showcase_events, a.showcase_growth),
            RevenueLine(a.corporate_rate, a.corporate_events, a.corporate_growth),
        ],
        "ancillary": [
            RevenueLine(a.merch_avg, a.merch_sales, a.merch_growth),
            RevenueLine(a.rental_avg, a.rental_sales, a.rental_growth),
            RevenueLine(a.bev_avg, a.bev_sales, a.bev_growth),
        ],
    }


def ratio(numerator: float, denominator: float) -> float:
    """
    Float division with IEEE results for a zero denominator
    (+/-inf for a non-zero numerator, nan for 0/0).
    """
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _round_half_up(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.floor(x + 0.5))


# ---------------------------------------------------------------------------
# Sub-calculations
# ---------------------------------------------------------------------------

def startup_totals(a: AssumptionSet) -> tuple[float, float, float]:
    subtotal = _sum([a.buildout, a.equipment, a.streaming, a.op_capital, a.legal, a.marketing])
    contingency = subtotal * a.contingency_pct
    return subtotal, contingency, subtotal + contingency


def monthly_fixed_costs(a: AssumptionSet) -> float:
    return _sum([
        a.rent, a.utilities, a.insurance, a.monthly_marketing,
        a.software, a.maintenance, a.misc,
    ])


def monthly_staffing_costs(a: AssumptionSet) -> float:
    return _sum([
        a.tech_director_rate * a.tech_director_hours,
        a.general_manager_rate * a.general_manager_hours,
        a.student_worker_rate * a.student_worker_hours,
        a.event_staff_rate * a.event_staff_hours,
    ])


def startup_breakdown(a: AssumptionSet, contingency: float, total_startup: float) -> List[CostItem]:
    items = [
        ("Buildout", a.buildout),
        ("Equipment", a.equipment),
        ("Streaming", a.streaming),
        ("Operating Capital", a.op_capital),
        ("Legal/Permits", a.legal),
        ("Marketing", a.marketing),
        ("Contingency", contingency),
    ]
    return [CostItem(name, value, ratio(value, total_startup)) for name, value in items]


def operating_breakdown(a: AssumptionSet, monthly_fixed: float, monthly_staffing: float) -> List[CostItem]:
    monthly_total = monthly_fixed + monthly_staffing
    items = [
        ("Rent", a.rent),
        ("Utilities", a.utilities),
        ("Insurance", a.insurance),
        ("Marketing", a.monthly_marketing),
        ("Software", a.software),
        ("Maintenance", a.maintenance),
        ("Misc", a.misc),
        ("Staffing", monthly_staffing),
    ]
    return [CostItem(name, value, ratio(value, monthly_total)) for name, value in items]


def year_one_revenue(families: Dict[str, List[RevenueLine]]) -> Dict[str, float]:
    return {
        name: family_total(lines) * MONTHS_PER_YEAR * ANNUAL_RAMP[name]
        for name, lines in families.items()
    }


def grown_revenue(families: Dict[str, List[RevenueLine]], years: int) -> Dict[str, float]:
    """Annual family revenue with growth applied `years` times, no ramp."""
    modifier = _grown(years)
    return {
        name: family_total(lines, modifier) * MONTHS_PER_YEAR
        for name, lines in families.items()
    }


def year_expenses(monthly_fixed: float, monthly_staffing: float, year: int, owner_draw: float = 0.0) -> float:
    fixed = monthly_fixed * MONTHS_PER_YEAR
    staffing = monthly_staffing * MONTHS_PER_YEAR
    if year == 1:
        return fixed + staffing
    return (fixed * FIXED_COST_ESCALATION[year]) + (staffing * STAFFING_ESCALATION[year]) + owner_draw


def capacity_analysis(a: AssumptionSet) -> CapacityAnalysis:
    weekly_hours = a.daily_hours * a.days_per_week
    monthly_hours = weekly_hours * WEEKS_PER_MONTH

    live_room_net = monthly_hours - a.live_room_lockout - ((monthly_hours - a.live_room_lockout) * ROOM_BUFFER)
    control_room_net = monthly_hours - CONTROL_ROOM_LOCKOUT - ((monthly_hours - CONTROL_ROOM_LOCKOUT) * ROOM_BUFFER)
    total_capacity = live_room_net + control_room_net

    member_hours = (
        (a.student_members * MEMBER_HOURS["student"])
        + (a.artist_members * MEMBER_HOURS["artist"])
        + (a.pro_members * MEMBER_HOURS["pro"])
    )
    service_hours = a.rehearsal_hours + (a.recording_hours * RECORDING_HOUR_WEIGHT) + a.lesson_hours
    event_hours = (
        (a.streaming_events * EVENT_HOURS["streaming"])
        + (a.showcase_events * EVENT_HOURS["showcase"])
        + (a.corporate_events * EVENT_HOURS["corporate"])
    )
    total_hours = member_hours + service_hours + event_hours
    utilization_required = ratio(total_hours, total_capacity)

    return CapacityAnalysis(
        weekly_hours=weekly_hours,
        monthly_hours=monthly_hours,
        live_room_net=live_room_net,
        control_room_net=control_room_net,
        total_capacity=total_capacity,
        member_hours_required=member_hours,
        service_hours_required=service_hours,
        event_hours_required=event_hours,
        total_hours_required=total_hours,
        utilization_required=utilization_required,
        revenue_at_utilization=tuple(utilization_revenue(total_capacity, utilization_required)),
    )


def utilization_revenue(total_capacity: float, utilization_required: float) -> List[UtilizationScenario]:
    """Annual revenue if every capacity hour at a given utilization sold at its price point."""
    scenarios = []
    for utilization, price in UTILIZATION_PRICE_POINTS:
        current = (
            utilization == CURRENT_UTILIZATION_LEVEL
            and abs(utilization_required - CURRENT_UTILIZATION_LEVEL) < CURRENT_BAND
        )
        scenarios.append(
            UtilizationScenario(
                label=f"{round(utilization * 100)}%",
                utilization=utilization,
                hourly_price=price,
                revenue=total_capacity * utilization * price * MONTHS_PER_YEAR,
                current=current,
            )
        )
    return scenarios


def market_sizing(a: AssumptionSet) -> MarketSizing:
    total_tam = a.primary_market + a.secondary_market + a.weekenders
    projected_members = total_tam * a.conversion_rate
    average_fee = (a.student_fee + a.artist_fee + a.pro_fee) / 3

    scenarios = []
    for rate_pct in CONVERSION_SCENARIOS_PCT:
        members = total_tam * (rate_pct / 100)
        scenarios.append(
            ConversionScenario(
                rate_pct=rate_pct,
                members=_round_half_up(members),
                revenue=members * average_fee * MONTHS_PER_YEAR,
            )
        )

    return MarketSizing(
        total_tam=total_tam,
        projected_members=projected_members,
        average_membership_fee=average_fee,
        tam_revenue_estimate=projected_members * average_fee * MONTHS_PER_YEAR,
        segments=(
            RevenueSlice("Primary (10 min)", a.primary_market),
            RevenueSlice("Secondary (20-30 min)", a.secondary_market),
            RevenueSlice("Weekenders", a.weekenders),
        ),
        conversion_sensitivity=tuple(scenarios),
    )


def monthly_series(
    families: Dict[str, List[RevenueLine]],
    monthly_fixed: float,
    monthly_staffing: float,
    total_startup: float,
) -> List[MonthRow]:
    base = {name: family_total(lines) for name, lines in families.items()}
    expenses = monthly_fixed + monthly_staffing

    rows: List[MonthRow] = []
    cumulative = -total_startup
    for month, factor in zip(MONTH_NAMES, MONTHLY_RAMP):
        membership = base["membership"] * factor
        hourly = base["hourly"] * factor
        events = base["events"] * factor
        ancillary = base["ancillary"] * factor
        revenue = membership + hourly + events + ancillary
        net = revenue - expenses
        cumulative += net
        rows.append(
            MonthRow(
                month=month,
                revenue=revenue,
                expenses=expenses,
                net=net,
                cumulative=cumulative,
                membership=membership,
                hourly=hourly,
                events=events,
                ancillary=ancillary,
            )
        )
    return rows


def break_even_month(rows: Sequence[MonthRow]) -> Optional[int]:
    for i, row in enumerate(rows):
        if row.cumulative > 0:
            return i + 1
    return None


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def project(a: AssumptionSet) -> Projection:
    startup_subtotal, contingency, total_startup = startup_totals(a)
    monthly_fixed = monthly_fixed_costs(a)
    monthly_staffing = monthly_staffing_costs(a)

    families = revenue_families(a)
    y1 = year_one_revenue(families)
    y2 = grown_revenue(families, years=1)
    y3 = grown_revenue(families, years=2)

    revenue_y1 = y1["membership"] + y1["hourly"] + y1["events"] + y1["ancillary"]
    expenses_y1 = year_expenses(monthly_fixed, monthly_staffing, year=1)
    net_y1 = revenue_y1 - expenses_y1
    cumulative_y1 = net_y1 - total_startup

    revenue_y2 = y2["membership"] + y2["hourly"] + y2["events"] + y2["ancillary"]
    expenses_y2 = year_expenses(monthly_fixed, monthly_staffing, year=2, owner_draw=a.owner_draw_y2)
    net_y2 = revenue_y2 - expenses_y2
    cumulative_y2 = cumulative_y1 + net_y2

    revenue_y3 = y3["membership"] + y3["hourly"] + y3["events"] + y3["ancillary"]
    expenses_y3 = year_expenses(monthly_fixed, monthly_staffing, year=3, owner_draw=a.owner_draw_y3)
    net_y3 = revenue_y3 - expenses_y3
    cumulative_y3 = cumulative_y2 + net_y3

    months = monthly_series(families, monthly_fixed, monthly_staffing, total_startup)

    return Projection(
        startup_subtotal=startup_subtotal,
        contingency=contingency,
        total_startup=total_startup,
        monthly_fixed=monthly_fixed,
        monthly_staffing=monthly_staffing,
        membership_y1=y1["membership"],
        hourly_y1=y1["hourly"],
        events_y1=y1["events"],
        ancillary_y1=y1["ancillary"],
        total_revenue_y1=revenue_y1,
        total_expenses_y1=expenses_y1,
        net_income_y1=net_y1,
        cumulative_y1=cumulative_y1,
        margin_y1=ratio(net_y1, revenue_y1),
        membership_y2=y2["membership"],
        hourly_y2=y2["hourly"],
        events_y2=y2["events"],
        ancillary_y2=y2["ancillary"],
        total_revenue_y2=revenue_y2,
        total_expenses_y2=expenses_y2,
        net_income_y2=net_y2,
        cumulative_y2=cumulative_y2,
        margin_y2=ratio(net_y2, revenue_y2),
        membership_y3=y3["membership"],
        hourly_y3=y3["hourly"],
        events_y3=y3["events"],
        ancillary_y3=y3["ancillary"],
        total_revenue_y3=revenue_y3,
        total_expenses_y3=expenses_y3,
        net_income_y3=net_y3,
        cumulative_y3=cumulative_y3,
        margin_y3=ratio(net_y3, revenue_y3),
        capacity=capacity_analysis(a),
        market=market_sizing(a),
        monthly_data=tuple(months),
        break_even_month=break_even_month(months),
        revenue_mix=tuple(RevenueSlice(FAMILY_LABELS[name], value) for name, value in y1.items()),
        year_comparison=(
            YearSummary("Year 1", revenue_y1, expenses_y1, net_y1, cumulative_y1),
            YearSummary("Year 2", revenue_y2, expenses_y2, net_y2, cumulative_y2),
            YearSummary("Year 3", revenue_y3, expenses_y3, net_y3, cumulative_y3),
        ),
        startup_breakdown=tuple(startup_breakdown(a, contingency, total_startup)),
        operating_breakdown=tuple(operating_breakdown(a, monthly_fixed, monthly_staffing)),
    )
