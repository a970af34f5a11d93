# src/thirdspace/api/http.py
from __future__ import annotations

from typing import Any

from fastapi import Body, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from thirdspace.adapters.config import config
from thirdspace.adapters.logging_utils import get_logger
from thirdspace.adapters.sql_repo import SqlSavedModelRepository
from thirdspace.domain.assumptions import AssumptionSet
from thirdspace.domain.ports import SavedModelRepository
from thirdspace.services.projections import project_payload, projection_to_dict
from .schemas import DeleteResult, ErrorResponse, SavedModelRecord, SavedModelSummary, SavedModelWrite

logger = get_logger(__name__)

app = FastAPI(title="3rd Space financial model")
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

_model_repo = SqlSavedModelRepository(config.DB_URI)

NOT_FOUND = "Model not found"
_NOT_FOUND_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_model_repo() -> SavedModelRepository:
    return _model_repo


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# -----------------------------
# Saved models
# -----------------------------
@app.get("/api/models", response_model=list[SavedModelSummary], responses={500: {"model": ErrorResponse}})
def list_models(repo: SavedModelRepository = Depends(get_model_repo)) -> Any:
    try:
        return repo.list_summaries(limit=config.MODELS_LIST_LIMIT)
    except Exception:
        logger.exception("list_models_failed")
        return _error(500, "Failed to fetch models")


@app.get("/api/models/{model_id}", response_model=SavedModelRecord, responses=_NOT_FOUND_RESPONSES)
def get_model(model_id: int, repo: SavedModelRepository = Depends(get_model_repo)) -> Any:
    try:
        rec = repo.get(model_id)
    except Exception:
        logger.exception("get_model_failed", extra={"context": {"model_id": model_id}})
        return _error(500, "Failed to fetch model")
    if rec is None:
        return _error(404, NOT_FOUND)
    return rec


@app.post("/api/models", response_model=SavedModelSummary, responses={500: {"model": ErrorResponse}})
def create_model(body: SavedModelWrite, repo: SavedModelRepository = Depends(get_model_repo)) -> Any:
    try:
        created = repo.create(name=body.name, data=body.data)
    except Exception:
        logger.exception("create_model_failed", extra={"context": {"name": body.name}})
        return _error(500, "Failed to save model")
    logger.info("model_saved", extra={"context": {"model_id": created["id"]}})
    return created


@app.put("/api/models/{model_id}", response_model=SavedModelSummary, responses=_NOT_FOUND_RESPONSES)
def update_model(
    model_id: int,
    body: SavedModelWrite,
    repo: SavedModelRepository = Depends(get_model_repo),
) -> Any:
    try:
        updated = repo.update(model_id, name=body.name, data=body.data)
    except Exception:
        logger.exception("update_model_failed", extra={"context": {"model_id": model_id}})
        return _error(500, "Failed to update model")
    if updated is None:
        return _error(404, NOT_FOUND)
    return updated


@app.delete("/api/models/{model_id}", response_model=DeleteResult, responses=_NOT_FOUND_RESPONSES)
def delete_model(model_id: int, repo: SavedModelRepository = Depends(get_model_repo)) -> Any:
    try:
        deleted = repo.delete(model_id)
    except Exception:
        logger.exception("delete_model_failed", extra={"context": {"model_id": model_id}})
        return _error(500, "Failed to delete model")
    if not deleted:
        return _error(404, NOT_FOUND)
    return DeleteResult(success=True)


# -----------------------------
# Projection
# -----------------------------
@app.get("/api/assumptions/defaults")
def default_assumptions() -> dict[str, float]:
    return AssumptionSet().to_payload()


@app.post("/api/projection")
def projection_endpoint(payload: dict[str, Any] | None = Body(default=None)) -> dict[str, Any]:
    """
    Project a (partial) assumption payload; missing keys use the defaults.
    Non-finite ratios come back as null.
    """
    _, projection = project_payload(payload)
    return projection_to_dict(projection)


@app.get("/api/models/{model_id}/projection", responses=_NOT_FOUND_RESPONSES)
def saved_model_projection(model_id: int, repo: SavedModelRepository = Depends(get_model_repo)) -> Any:
    try:
        rec = repo.get(model_id)
    except Exception:
        logger.exception("get_model_failed", extra={"context": {"model_id": model_id}})
        return _error(500, "Failed to fetch model")
    if rec is None:
        return _error(404, NOT_FOUND)

    data = rec["data"] if isinstance(rec["data"], dict) else {}
    _, projection = project_payload(data)
    return {"id": rec["id"], "name": rec["name"], "projection": projection_to_dict(projection)}
