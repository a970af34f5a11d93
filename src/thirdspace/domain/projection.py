from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class YearSummary:
    year: str             # "Year 1".."Year 3"
    revenue: float
    expenses: float
    net: float
    cumulative: float     # includes startup investment


@dataclass(frozen=True)
class MonthRow:
    month: str            # "Jan".."Dec"
    revenue: float
    expenses: float
    net: float
    cumulative: float     # running total starting at -total_startup
    membership: float
    hourly: float
    events: float
    ancillary: float


@dataclass(frozen=True)
class RevenueSlice:
    name: str
    value: float


@dataclass(frozen=True)
class CostItem:
    name: str
    value: float
    share: float          # of the breakdown total; inf/nan when that total is 0


@dataclass(frozen=True)
class UtilizationScenario:
    label: str            # "40%".."85%"
    utilization: float
    hourly_price: float
    revenue: float        # annual
    current: bool         # required utilization sits near this level


@dataclass(frozen=True)
class CapacityAnalysis:
    weekly_hours: float
    monthly_hours: float
    live_room_net: float
    control_room_net: float
    total_capacity: float
    member_hours_required: float
    service_hours_required: float
    event_hours_required: float
    total_hours_required: float
    utilization_required: float  # may be inf/nan when capacity is 0
    revenue_at_utilization: Tuple[UtilizationScenario, ...]


@dataclass(frozen=True)
class ConversionScenario:
    rate_pct: float       # e.g. 1.5 for 1.5%
    members: float        # rounded half-up for display
    revenue: float


@dataclass(frozen=True)
class MarketSizing:
    total_tam: float
    projected_members: float
    average_membership_fee: float
    tam_revenue_estimate: float
    segments: Tuple[RevenueSlice, ...]
    conversion_sensitivity: Tuple[ConversionScenario, ...]


@dataclass(frozen=True)
class Projection:
    # Startup
    startup_subtotal: float
    contingency: float
    total_startup: float

    # Monthly run-rate costs
    monthly_fixed: float
    monthly_staffing: float

    # Year 1 (ramp-adjusted)
    membership_y1: float
    hourly_y1: float
    events_y1: float
    ancillary_y1: float
    total_revenue_y1: float
    total_expenses_y1: float
    net_income_y1: float
    cumulative_y1: float
    margin_y1: float

    # Year 2 (one year of growth)
    membership_y2: float
    hourly_y2: float
    events_y2: float
    ancillary_y2: float
    total_revenue_y2: float
    total_expenses_y2: float
    net_income_y2: float
    cumulative_y2: float
    margin_y2: float

    # Year 3 (growth compounded twice)
    membership_y3: float
    hourly_y3: float
    events_y3: float
    ancillary_y3: float
    total_revenue_y3: float
    total_expenses_y3: float
    net_income_y3: float
    cumulative_y3: float
    margin_y3: float

    capacity: CapacityAnalysis
    market: MarketSizing

    monthly_data: Tuple[MonthRow, ...]
    break_even_month: Optional[int]   # 1-based, None when not reached in 12 months
    revenue_mix: Tuple[RevenueSlice, ...]
    year_comparison: Tuple[YearSummary, ...]
    startup_breakdown: Tuple[CostItem, ...]
    operating_breakdown: Tuple[CostItem, ...]   # monthly, staffing as one line

    # Flat accessors the dashboard cards read most often
    @property
    def total_capacity(self) -> float:
        return self.capacity.total_capacity

    @property
    def utilization_required(self) -> float:
        return self.capacity.utilization_required

    @property
    def total_tam(self) -> float:
        return self.market.total_tam

    @property
    def projected_members(self) -> float:
        return self.market.projected_members
