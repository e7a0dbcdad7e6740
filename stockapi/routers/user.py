from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from stockapi.core.requests import field_filter
from stockapi.core.responses import ResponseCode
from stockapi.repositories.user_repository import UserRepository, public_user
from stockapi.routers.common import (
    create_many,
    create_one,
    delete_one,
    get_one,
    get_repositories,
    list_documents,
    update_one,
)

router = APIRouter(prefix="/api/user", tags=["users"])


def _users(request: Request) -> UserRepository:
    return get_repositories(request).users


@router.post("/")
def create_user(request: Request, payload: Any = Body(None)):
    return create_one(_users(request), payload, present=public_user)


@router.post("/users")
def create_users(request: Request, payload: Any = Body(None)):
    return create_many(_users(request), payload, "users", present=public_user)


@router.get("/")
def list_users(request: Request):
    params = request.query_params
    return list_documents(_users(request), params, field_filter(params, ["appRole", "business"]), present=public_user)


@router.get("/{user_id}")
def get_user(user_id: str, request: Request):
    return get_one(_users(request), user_id, ResponseCode.USER_NOT_FOUND, present=public_user)


@router.put("/{user_id}")
def update_user(user_id: str, request: Request, payload: Any = Body(None)):
    return update_one(_users(request), user_id, payload, ResponseCode.USER_NOT_FOUND, present=public_user)


@router.delete("/{user_id}")
def delete_user(user_id: str, request: Request):
    return delete_one(_users(request), user_id, ResponseCode.USER_NOT_FOUND, "User", present=public_user)
