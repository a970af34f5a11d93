# src/thirdspace/adapters/sql_repo.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlmodel import JSON, Column, DateTime, Field, Session, SQLModel, create_engine, select

from thirdspace.domain.ports import SavedModelRecord, SavedModelSummary


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavedModelRow(SQLModel, table=True):
    __tablename__ = "saved_models"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)

    # AssumptionSet payload, stored as-is
    data: Any = Field(sa_column=Column(JSON, nullable=False))

    # timezone-aware UTC; SQLite hands them back naive
    created_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True), index=True)

    def summary(self) -> SavedModelSummary:
        return SavedModelSummary(
            id=int(self.id),  # type: ignore[arg-type]
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def record(self) -> SavedModelRecord:
        return SavedModelRecord(data=self.data, **self.summary())


class SqlSavedModelRepository:
    def __init__(self, uri: str = "sqlite:///thirdspace.db"):
        connect_args = {"check_same_thread": False} if uri.startswith("sqlite") else {}
        self.engine = create_engine(uri, echo=False, connect_args=connect_args)
        SQLModel.metadata.create_all(self.engine)

    def list_summaries(self, limit: int | None = None) -> list[SavedModelSummary]:
        with Session(self.engine) as session:
            stmt = select(SavedModelRow).order_by(
                SavedModelRow.updated_at.desc(),  # type: ignore[attr-defined]
                SavedModelRow.id.desc(),  # type: ignore[union-attr]
            )
            if limit is not None:
                stmt = stmt.limit(limit)
            return [r.summary() for r in session.exec(stmt)]

    def get(self, model_id: int) -> SavedModelRecord | None:
        with Session(self.engine) as session:
            row = session.get(SavedModelRow, model_id)
            return row.record() if row else None

    def create(self, name: str, data: Any) -> SavedModelSummary:
        now = _utcnow()
        row = SavedModelRow(name=name, data=data, created_at=now, updated_at=now)
        with Session(self.engine) as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return row.summary()

    def update(self, model_id: int, name: str, data: Any) -> SavedModelSummary | None:
        with Session(self.engine) as session:
            row = session.get(SavedModelRow, model_id)
            if not row:
                return None
            row.name = name
            row.data = data
            row.updated_at = _utcnow()
            session.add(row)
            session.commit()
            session.refresh(row)
            return row.summary()

    def delete(self, model_id: int) -> bool:
        with Session(self.engine) as session:
            row = session.get(SavedModelRow, model_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True
