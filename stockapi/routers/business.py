from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from stockapi.core.responses import ResponseCode
from stockapi.repositories.base import name_pattern
from stockapi.repositories.business_repository import BusinessRepository
from stockapi.routers.common import (
    create_many,
    create_one,
    delete_one,
    get_one,
    get_repositories,
    list_documents,
    update_one,
)

router = APIRouter(prefix="/api/business", tags=["businesses"])


def _businesses(request: Request) -> BusinessRepository:
    return get_repositories(request).businesses


@router.post("/")
def create_business(request: Request, payload: Any = Body(None)):
    return create_one(_businesses(request), payload)


@router.post("/businesses")
def create_businesses(request: Request, payload: Any = Body(None)):
    return create_many(_businesses(request), payload, "businesses")


@router.get("/")
def list_businesses(request: Request):
    params = request.query_params
    filter_spec = {"name": name_pattern(params["search"])} if params.get("search") else {}
    return list_documents(_businesses(request), params, filter_spec)


@router.get("/{business_id}")
def get_business(business_id: str, request: Request):
    return get_one(_businesses(request), business_id, ResponseCode.BUSINESS_NOT_FOUND)


@router.put("/{business_id}")
def update_business(business_id: str, request: Request, payload: Any = Body(None)):
    return update_one(_businesses(request), business_id, payload, ResponseCode.BUSINESS_NOT_FOUND)


@router.delete("/{business_id}")
def delete_business(business_id: str, request: Request):
    return delete_one(_businesses(request), business_id, ResponseCode.BUSINESS_NOT_FOUND, "Business")
