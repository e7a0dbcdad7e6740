from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from stockapi.core.requests import field_filter
from stockapi.core.responses import ResponseCode
from stockapi.repositories.transaction_repository import TransactionRepository
from stockapi.routers.common import (
    create_many,
    create_one,
    delete_one,
    get_one,
    get_repositories,
    list_documents,
    update_one,
)

router = APIRouter(prefix="/api/transaction", tags=["transactions"])


def _transactions(request: Request) -> TransactionRepository:
    return get_repositories(request).transactions


@router.post("/")
def create_transaction(request: Request, payload: Any = Body(None)):
    return create_one(_transactions(request), payload)


@router.post("/transactions")
def create_transactions(request: Request, payload: Any = Body(None)):
    return create_many(_transactions(request), payload, "transactions")


@router.get("/")
def list_transactions(request: Request):
    params = request.query_params
    return list_documents(_transactions(request), params, field_filter(params, ["status", "clientId"]))


@router.get("/{transaction_id}")
def get_transaction(transaction_id: str, request: Request):
    return get_one(_transactions(request), transaction_id, ResponseCode.TRANSACTION_NOT_FOUND)


@router.put("/{transaction_id}")
def update_transaction(transaction_id: str, request: Request, payload: Any = Body(None)):
    return update_one(_transactions(request), transaction_id, payload, ResponseCode.TRANSACTION_NOT_FOUND)


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: str, request: Request):
    return delete_one(_transactions(request), transaction_id, ResponseCode.TRANSACTION_NOT_FOUND, "Transaction")
