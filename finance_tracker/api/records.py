"""
CRUD endpoints for stored records.

Every record type gets the same list / create / get / update / delete
routes, built from its repository and schemas. Record types with extra
rules hook in through ``prepare_create`` and ``prepare_update``.
"""

from typing import Any, Callable, Dict, Optional, Tuple, Type

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from finance_tracker.api import schemas
from finance_tracker.db.database import get_db
from finance_tracker.db.repositories import (
    AssetRepository,
    ExpenseRepository,
    IncomeRepository,
    Repository,
)

PrepareCreate = Callable[[Dict[str, Any]], Dict[str, Any]]
PrepareUpdate = Callable[[Any, Dict[str, Any]], Dict[str, Any]]


def build_record_router(
    repository_cls: Type[Repository],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
    label: str,
    prepare_create: Optional[PrepareCreate] = None,
    prepare_update: Optional[PrepareUpdate] = None,
    clearable: Tuple[str, ...] = ("notes",),
) -> APIRouter:
    """
    Build a router exposing CRUD routes for one record type.

    On update, an explicit null clears a field only when it is listed in
    ``clearable``; for any other field it leaves the stored value alone.
    """
    router = APIRouter()
    not_found = f"{label} not found"

    def get_repository(db: Session = Depends(get_db)) -> Repository:
        return repository_cls(db)

    @router.get("/")
    async def list_records(repo: Repository = Depends(get_repository)):
        records = repo.get_all()
        return {
            "items": [response_schema.model_validate(r) for r in records],
            "total": len(records),
        }

    @router.post("/", response_model=response_schema, status_code=201)
    async def create_record(
        data: create_schema,
        repo: Repository = Depends(get_repository),
    ):
        values = data.model_dump()
        if prepare_create:
            values = prepare_create(values)
        return repo.add(values)

    @router.get("/{record_id}", response_model=response_schema)
    async def get_record(record_id: str, repo: Repository = Depends(get_repository)):
        record = repo.get_by_id(record_id)
        if not record:
            raise HTTPException(status_code=404, detail=not_found)
        return record

    @router.put("/{record_id}", response_model=response_schema)
    async def update_record(
        record_id: str,
        data: update_schema,
        repo: Repository = Depends(get_repository),
    ):
        record = repo.get_by_id(record_id)
        if not record:
            raise HTTPException(status_code=404, detail=not_found)

        # Update only provided fields
        values = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in clearable
        }
        if prepare_update:
            values = prepare_update(record, values)
        return repo.update(record_id, values)

    @router.delete("/{record_id}")
    async def delete_record(record_id: str, repo: Repository = Depends(get_repository)):
        if not repo.delete(record_id):
            raise HTTPException(status_code=404, detail=not_found)
        return {"deleted": True, "id": record_id}

    return router


def check_date_range(record: Any, values: Dict[str, Any]) -> Dict[str, Any]:
    """Reject updates that leave an entry ending on or before it starts."""
    start = values.get("start_date", record.start_date)
    end = values.get("end_date", record.end_date)
    if start and end and end <= start:
        raise HTTPException(status_code=422, detail="end_date must be after start_date")
    return values


assets_router = build_record_router(
    AssetRepository,
    schemas.AssetCreate,
    schemas.AssetUpdate,
    schemas.AssetResponse,
    label="Asset",
)

incomes_router = build_record_router(
    IncomeRepository,
    schemas.IncomeCreate,
    schemas.IncomeUpdate,
    schemas.IncomeResponse,
    label="Income",
    prepare_update=check_date_range,
    clearable=("end_date", "bank_account_id", "notes"),
)

expenses_router = build_record_router(
    ExpenseRepository,
    schemas.ExpenseCreate,
    schemas.ExpenseUpdate,
    schemas.ExpenseResponse,
    label="Expense",
    prepare_update=check_date_range,
    clearable=("end_date", "notes"),
)
