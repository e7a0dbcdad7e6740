"""Purchases from suppliers (``import`` is a keyword, hence the module name)."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from stockapi.core.requests import field_filter
from stockapi.core.responses import ResponseCode
from stockapi.repositories.import_repository import ImportRepository
from stockapi.routers.common import (
    create_many,
    create_one,
    delete_one,
    get_one,
    get_repositories,
    list_documents,
    update_one,
)

router = APIRouter(prefix="/api/import", tags=["imports"])


def _imports(request: Request) -> ImportRepository:
    return get_repositories(request).imports


@router.post("/")
def create_import(request: Request, payload: Any = Body(None)):
    return create_one(_imports(request), payload)


@router.post("/imports")
def create_imports(request: Request, payload: Any = Body(None)):
    return create_many(_imports(request), payload, "imports")


@router.get("/")
def list_imports(request: Request):
    params = request.query_params
    return list_documents(_imports(request), params, field_filter(params, ["status", "supplierId"]))


@router.get("/{import_id}")
def get_import(import_id: str, request: Request):
    return get_one(_imports(request), import_id, ResponseCode.IMPORT_NOT_FOUND)


@router.put("/{import_id}")
def update_import(import_id: str, request: Request, payload: Any = Body(None)):
    return update_one(_imports(request), import_id, payload, ResponseCode.IMPORT_NOT_FOUND)


@router.delete("/{import_id}")
def delete_import(import_id: str, request: Request):
    return delete_one(_imports(request), import_id, ResponseCode.IMPORT_NOT_FOUND, "Import")
