# tests/fixtures/assumptions.py

from thirdspace.domain.assumptions import AssumptionSet

GROWTH_FIELDS = [
    "student_growth", "artist_growth", "pro_growth",
    "rehearsal_growth", "recording_growth", "lesson_growth",
    "streaming_growth", "showcase_growth", "corporate_growth",
    "merch_growth", "rental_growth", "bev_growth",
]

STARTUP_FIELDS = ["buildout", "equipment", "streaming", "op_capital", "legal", "marketing"]

REVENUE_COUNT_FIELDS = [
    "student_members", "artist_members", "pro_members",
    "rehearsal_hours", "recording_hours", "lesson_hours",
    "streaming_events", "showcase_events", "corporate_events",
    "merch_sales", "rental_sales", "bev_sales",
]


def defaults() -> AssumptionSet:
    return AssumptionSet()


def no_growth() -> AssumptionSet:
    return AssumptionSet().replace(**{f: 0 for f in GROWTH_FIELDS})


def no_startup_costs() -> AssumptionSet:
    """
    Defaults with nothing to pay back: monthly net turns positive in month 2
    (13,415 x 0.6 - 6,802 > 94.50 lost in month 1).
    """
    return AssumptionSet().replace(**{f: 0 for f in STARTUP_FIELDS})


def zero_capacity() -> AssumptionSet:
    """
    Live and control room net hours cancel exactly:
    live = 6 - 0.9, control = -6 + 0.9.
    """
    return AssumptionSet().replace(daily_hours=0, live_room_lockout=-6)


def no_revenue() -> AssumptionSet:
    return AssumptionSet().replace(**{f: 0 for f in REVENUE_COUNT_FIELDS})
