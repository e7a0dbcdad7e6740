from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from stockapi.core.requests import field_filter
from stockapi.core.responses import ResponseCode
from stockapi.repositories.base import name_pattern
from stockapi.repositories.partner_repository import PartnerRepository
from stockapi.routers.common import (
    create_many,
    create_one,
    delete_one,
    get_one,
    get_repositories,
    list_documents,
    update_one,
)

router = APIRouter(prefix="/api/partner", tags=["partners"])


def _partners(request: Request) -> PartnerRepository:
    return get_repositories(request).partners


@router.post("/")
def create_partner(request: Request, payload: Any = Body(None)):
    return create_one(_partners(request), payload)


@router.post("/partners")
def create_partners(request: Request, payload: Any = Body(None)):
    return create_many(_partners(request), payload, "partners")


@router.get("/")
def list_partners(request: Request):
    params = request.query_params
    filter_spec = field_filter(params, ["partnerType"])
    if params.get("search"):
        filter_spec["partnerName"] = name_pattern(params["search"])
    return list_documents(_partners(request), params, filter_spec)


@router.get("/{partner_id}")
def get_partner(partner_id: str, request: Request):
    return get_one(_partners(request), partner_id, ResponseCode.PARTNER_NOT_FOUND)


@router.put("/{partner_id}")
def update_partner(partner_id: str, request: Request, payload: Any = Body(None)):
    return update_one(_partners(request), partner_id, payload, ResponseCode.PARTNER_NOT_FOUND)


@router.delete("/{partner_id}")
def delete_partner(partner_id: str, request: Request):
    return delete_one(_partners(request), partner_id, ResponseCode.PARTNER_NOT_FOUND, "Partner")
