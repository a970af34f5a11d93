# src/thirdspace/domain/assumptions.py
from __future__ import annotations

import math
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


def _to_number(v: Any) -> float:
    """
    Mirror the dashboard inputs: anything that is not a usable number is 0.

    No clamping, no percent handling. "12.5" parses, "abc" / None / NaN do not.
    """
    if v is None or isinstance(v, bool):
        return 0.0
    if isinstance(v, str):
        v = v.strip().replace("$", "").replace(",", "")
    try:
        f = float(v)
    except OverflowError:
        # ints past the float range, as JS Number() would give
        return math.inf if v > 0 else -math.inf
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(f):
        return 0.0
    return f


class AssumptionSet(BaseModel):
    """
    Every user-editable input of the studio model.

    Immutable. Use `replace(...)` for a field-level update and `merged(...)`
    to overlay a saved payload (only keys present in the payload win).
    Wire names are camelCase (`studentFee`), attributes are snake_case.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_default=True,
    )

    # Membership tiers
    student_fee: float = 65
    student_members: float = 25
    student_growth: float = 0.20
    artist_fee: float = 175
    artist_members: float = 12
    artist_growth: float = 0.25
    pro_fee: float = 350
    pro_members: float = 4
    pro_growth: float = 0.15

    # Hourly services
    rehearsal_rate: float = 35
    rehearsal_hours: float = 40
    rehearsal_growth: float = 0.15
    recording_rate: float = 100
    recording_hours: float = 20
    recording_growth: float = 0.25
    lesson_rate: float = 80
    lesson_hours: float = 30
    lesson_growth: float = 0.20
    lesson_commission: float = 0.35  # share the studio keeps

    # Events
    streaming_rate: float = 200
    streaming_events: float = 3
    streaming_growth: float = 0.30
    showcase_rate: float = 400
    showcase_events: float = 2
    showcase_growth: float = 0.25
    corporate_rate: float = 500
    corporate_events: float = 1
    corporate_growth: float = 0.20

    # Ancillary
    merch_avg: float = 35
    merch_sales: float = 30
    merch_growth: float = 0.30
    rental_avg: float = 30
    rental_sales: float = 20
    rental_growth: float = 0.20
    bev_avg: float = 5
    bev_sales: float = 100
    bev_growth: float = 0.25

    # Startup (one-time)
    buildout: float = 30_000
    equipment: float = 15_000
    streaming: float = 3_000
    op_capital: float = 25_000
    legal: float = 8_000
    marketing: float = 5_000
    contingency_pct: float = 0.15

    # Monthly fixed
    rent: float = 2_500
    utilities: float = 500
    insurance: float = 400
    monthly_marketing: float = 500
    software: float = 250
    maintenance: float = 400
    misc: float = 300

    # Staffing (rate per hour x hours per month)
    tech_director_rate: float = 0
    tech_director_hours: float = 0
    general_manager_rate: float = 0
    general_manager_hours: float = 0
    student_worker_rate: float = 20
    student_worker_hours: float = 80
    event_staff_rate: float = 22
    event_staff_hours: float = 16

    # Owner draw (annual, years 2 and 3 only)
    owner_draw_y2: float = 40_000
    owner_draw_y3: float = 80_000

    # Capacity
    daily_hours: float = 12
    days_per_week: float = 7
    live_room_lockout: float = 40
    utilization_target: float = 0.55

    # Market
    primary_market: float = 1_664
    secondary_market: float = 2_809
    weekenders: float = 225
    conversion_rate: float = 0.012

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_numeric(cls, v: Any) -> float:
        return _to_number(v)

    # ------------------------------------------------------------------

    @classmethod
    def _field_key(cls, key: str) -> str | None:
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None

    @classmethod
    def _normalize(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in data.items():
            name = cls._field_key(str(key))
            if name is not None:
                out[name] = value
        return out

    @classmethod
    def from_payload(cls, data: Mapping[str, Any] | None) -> "AssumptionSet":
        """Defaults overlaid with whatever `data` carries."""
        return cls().merged(data or {})

    def replace(self, **changes: Any) -> "AssumptionSet":
        """Copy with some fields changed; values go through the same coercion."""
        return self.merged(changes)

    def merged(self, data: Mapping[str, Any]) -> "AssumptionSet":
        """
        Apply a (possibly partial) payload on top of this set.

        Keys absent from `data` keep their current value; a key present with
        a null/garbage value becomes 0.
        """
        if not isinstance(data, Mapping):
            return self
        updates = self._normalize(data)
        if not updates:
            return self
        current = self.model_dump()
        current.update(updates)
        return type(self).model_validate(current)

    def to_payload(self) -> dict[str, float]:
        return self.model_dump(by_alias=True)


DEFAULT_ASSUMPTIONS = AssumptionSet()
