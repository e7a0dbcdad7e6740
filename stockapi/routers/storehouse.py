from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from stockapi.core.requests import field_filter
from stockapi.core.responses import ResponseCode
from stockapi.repositories.base import name_pattern
from stockapi.repositories.storehouse_repository import StoreHouseRepository
from stockapi.routers.common import (
    create_many,
    create_one,
    delete_one,
    get_one,
    get_repositories,
    list_documents,
    update_one,
)

router = APIRouter(prefix="/api/storehouse", tags=["storehouses"])


def _storehouses(request: Request) -> StoreHouseRepository:
    return get_repositories(request).storehouses


@router.post("/")
def create_storehouse(request: Request, payload: Any = Body(None)):
    return create_one(_storehouses(request), payload)


@router.post("/storehouses")
def create_storehouses(request: Request, payload: Any = Body(None)):
    return create_many(_storehouses(request), payload, "storehouses")


@router.get("/")
def list_storehouses(request: Request):
    params = request.query_params
    filter_spec = field_filter(params, {"businessId": "business"})
    if params.get("search"):
        filter_spec["name"] = name_pattern(params["search"])
    return list_documents(_storehouses(request), params, filter_spec)


@router.get("/{storehouse_id}")
def get_storehouse(storehouse_id: str, request: Request):
    return get_one(_storehouses(request), storehouse_id, ResponseCode.STOREHOUSE_NOT_FOUND)


@router.put("/{storehouse_id}")
def update_storehouse(storehouse_id: str, request: Request, payload: Any = Body(None)):
    return update_one(_storehouses(request), storehouse_id, payload, ResponseCode.STOREHOUSE_NOT_FOUND)


@router.delete("/{storehouse_id}")
def delete_storehouse(storehouse_id: str, request: Request):
    return delete_one(_storehouses(request), storehouse_id, ResponseCode.STOREHOUSE_NOT_FOUND, "StoreHouse")
