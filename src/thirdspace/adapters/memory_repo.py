import copy
from datetime import datetime, timezone
from typing import Any

from thirdspace.domain.ports import SavedModelRecord, SavedModelRepository, SavedModelSummary


class InMemorySavedModelRepository(SavedModelRepository):
    def __init__(self) -> None:
        self._items: dict[int, SavedModelRecord] = {}
        self._next_id = 1

    @staticmethod
    def _summary(rec: SavedModelRecord) -> SavedModelSummary:
        return SavedModelSummary(
            id=rec["id"],
            name=rec["name"],
            created_at=rec["created_at"],
            updated_at=rec["updated_at"],
        )

    def list_summaries(self, limit: int | None = None) -> list[SavedModelSummary]:
        recs = sorted(
            self._items.values(),
            key=lambda r: (r["updated_at"], r["id"]),
            reverse=True,
        )
        if limit is not None:
            recs = recs[:limit]
        return [self._summary(r) for r in recs]

    def get(self, model_id: int) -> SavedModelRecord | None:
        rec = self._items.get(model_id)
        return copy.deepcopy(rec) if rec else None

    def create(self, name: str, data: Any) -> SavedModelSummary:
        now = datetime.now(timezone.utc)
        rec = SavedModelRecord(
            id=self._next_id,
            name=name,
            data=copy.deepcopy(data),
            created_at=now,
            updated_at=now,
        )
        self._items[rec["id"]] = rec
        self._next_id += 1
        return self._summary(rec)

    def update(self, model_id: int, name: str, data: Any) -> SavedModelSummary | None:
        rec = self._items.get(model_id)
        if rec is None:
            return None
        rec["name"] = name
        rec["data"] = copy.deepcopy(data)
        rec["updated_at"] = datetime.now(timezone.utc)
        return self._summary(rec)

    def delete(self, model_id: int) -> bool:
        return self._items.pop(model_id, None) is not None
