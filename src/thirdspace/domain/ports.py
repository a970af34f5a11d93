# src/thirdspace/domain/ports.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, TypedDict


class SavedModelSummary(TypedDict):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class SavedModelRecord(SavedModelSummary):
    # AssumptionSet payload exactly as the client sent it (opaque JSON)
    data: Any


class SavedModelRepository(Protocol):
    """
    Storage for named assumption snapshots.

    Missing ids are reported as None / False, never raised. Storage failures
    propagate to the caller.
    """

    def list_summaries(self, limit: int | None = None) -> list[SavedModelSummary]:
        """Newest `updated_at` first."""
        ...

    def get(self, model_id: int) -> SavedModelRecord | None:
        ...

    def create(self, name: str, data: Any) -> SavedModelSummary:
        ...

    def update(self, model_id: int, name: str, data: Any) -> SavedModelSummary | None:
        ...

    def delete(self, model_id: int) -> bool:
        ...
