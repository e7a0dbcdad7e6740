from __future__ import annotations

import math
from typing import Any

from fastapi import APIRouter, Body, Request

from stockapi.core.requests import (
    pagination_args,
    parse_bool,
    parse_csv,
    parse_float,
    parse_int,
    wants_pagination,
)
from stockapi.core.responses import ResponseCode
from stockapi.repositories.item_repository import DEFAULT_LOW_STOCK_THRESHOLD, ItemRepository
from stockapi.routers.common import (
    create_many,
    create_one,
    delete_one,
    get_one,
    get_repositories,
    list_documents,
    run_query,
    update_one,
)

router = APIRouter(prefix="/api/item", tags=["items"])

ITEM_PAGE_SIZE = 20


def _items(request: Request) -> ItemRepository:
    return get_repositories(request).items


@router.post("/")
def create_item(request: Request, payload: Any = Body(None)):
    return create_one(_items(request), payload)


@router.post("/items")
def create_items(request: Request, payload: Any = Body(None)):
    return create_many(_items(request), payload, "items")


@router.get("/")
def list_items(request: Request):
    repo = _items(request)
    params = request.query_params
    search = params.get("search")
    if search:
        return run_query("search items", lambda: repo.search_by_name(search))
    if params.get("minPrice") or params.get("maxPrice"):
        low = parse_float(params.get("minPrice"), 0.0) or 0.0
        high = parse_float(params.get("maxPrice"), math.inf) or math.inf
        return run_query("items by price", lambda: repo.find_by_price_range(low, high))
    tags = parse_csv(params.get("tags"))
    if tags:
        return run_query("items by tags", lambda: repo.find_by_tags(tags))
    if parse_bool(params.get("lowStock")):
        threshold = parse_int(params.get("threshold"), DEFAULT_LOW_STOCK_THRESHOLD) or DEFAULT_LOW_STOCK_THRESHOLD
        return run_query("low stock items", lambda: repo.find_low_stock(threshold))
    if wants_pagination(params):
        page, limit = pagination_args(params, ITEM_PAGE_SIZE)
        return run_query("paginate items", lambda: repo.find_with_pagination({}, page, limit).to_dict())
    return list_documents(repo, params)


@router.get("/stats")
def item_stats(request: Request):
    repo = _items(request)
    return run_query("item stats", repo.get_items_with_stats)


@router.get("/tags")
def items_by_tag(request: Request):
    repo = _items(request)
    return run_query("items by tag", repo.get_items_by_tag)


@router.get("/{item_id}")
def get_item(item_id: str, request: Request):
    return get_one(_items(request), item_id, ResponseCode.ITEM_NOT_FOUND)


@router.put("/{item_id}")
def update_item(item_id: str, request: Request, payload: Any = Body(None)):
    return update_one(_items(request), item_id, payload, ResponseCode.ITEM_NOT_FOUND)


@router.delete("/{item_id}")
def delete_item(item_id: str, request: Request):
    return delete_one(_items(request), item_id, ResponseCode.ITEM_NOT_FOUND, "Item")
