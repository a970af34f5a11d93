# src/thirdspace/api/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


# --------------------------------------------
# Saved models (persistence gateway)
# --------------------------------------------

class SavedModelWrite(BaseModel):
    """
    Body for create / update.

    `data` is the AssumptionSet payload and is stored untouched; field names
    and types are not checked here.
    """
    model_config = ConfigDict(extra="allow")

    name: str
    data: Any = None


class SavedModelSummary(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class SavedModelRecord(SavedModelSummary):
    data: Any = None


class DeleteResult(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str
