"""Shared plumbing for the entity routers: repository lookup and CRUD responses."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from stockapi.core.config import get_settings
from stockapi.core.requests import pagination_args, wants_pagination
from stockapi.core.responses import (
    ResponseCode,
    error_code_for,
    failure_response,
    success_response,
)
from stockapi.db.collection import StorageError
from stockapi.domain.filters import FilterError
from stockapi.domain.schema import ValidationError
from stockapi.repositories import BaseRepository, Repositories

logger = logging.getLogger(__name__)

HANDLED_ERRORS = (ValidationError, FilterError, StorageError)

Presenter = Callable[[dict], Any]


def get_repositories(request: Request) -> Repositories:
    repos = getattr(getattr(request.app, "state", None), "repositories", None)
    if not repos:
        raise RuntimeError("Repositories not configured")
    return repos


def _present(doc: Optional[dict], present: Optional[Presenter]) -> Any:
    if doc is None or present is None:
        return doc
    return present(doc)


def _error(action: str, exc: Exception) -> JSONResponse:
    logger.info("%s failed: %s", action, exc)
    return failure_response(error_code_for(exc), exc)


def unwrap_many(payload: Any, key: str) -> Any:
    """Accept either a bare list or ``{"<key>": [...]}``."""
    if isinstance(payload, Mapping) and key in payload:
        return payload[key]
    return payload


def create_one(repo: BaseRepository, payload: Any, *, present: Optional[Presenter] = None) -> JSONResponse:
    try:
        doc = repo.create(payload)
    except HANDLED_ERRORS as exc:
        return _error(f"create in {repo.collection.name}", exc)
    return success_response(ResponseCode.CREATED, _present(doc, present))


def create_many(
    repo: BaseRepository, payload: Any, key: str, *, present: Optional[Presenter] = None
) -> JSONResponse:
    entries = unwrap_many(payload, key)
    if not isinstance(entries, list):
        return failure_response(ResponseCode.INVALID_REQUEST_INPUT, f"Expected a list of {key}")
    try:
        docs = repo.create_many(entries)
    except HANDLED_ERRORS as exc:
        return _error(f"bulk create in {repo.collection.name}", exc)
    return success_response(ResponseCode.CREATED, [_present(doc, present) for doc in docs])


def get_one(
    repo: BaseRepository, doc_id: str, not_found: ResponseCode, *, present: Optional[Presenter] = None
) -> JSONResponse:
    doc = repo.find_by_id(doc_id)
    if doc is None:
        return failure_response(not_found)
    return success_response(ResponseCode.OK, _present(doc, present))


def update_one(
    repo: BaseRepository,
    doc_id: str,
    payload: Any,
    not_found: ResponseCode,
    *,
    present: Optional[Presenter] = None,
) -> JSONResponse:
    try:
        doc = repo.update_by_id(doc_id, payload if payload is not None else {})
    except HANDLED_ERRORS as exc:
        return _error(f"update {repo.collection.name}/{doc_id}", exc)
    if doc is None:
        return failure_response(not_found)
    return success_response(ResponseCode.OK, _present(doc, present))


def delete_one(
    repo: BaseRepository,
    doc_id: str,
    not_found: ResponseCode,
    label: str,
    *,
    present: Optional[Presenter] = None,
) -> JSONResponse:
    try:
        doc = repo.delete_by_id(doc_id)
    except StorageError as exc:
        return _error(f"delete {repo.collection.name}/{doc_id}", exc)
    if doc is None:
        return failure_response(not_found)
    return success_response(
        ResponseCode.OK,
        {"message": f"{label} deleted successfully", "deleted": _present(doc, present)},
    )


def list_documents(
    repo: BaseRepository,
    params: Mapping[str, str],
    filter_spec: Optional[Mapping[str, Any]] = None,
    *,
    default_limit: Optional[int] = None,
    present: Optional[Presenter] = None,
) -> JSONResponse:
    """Filtered listing; switches to a paginated payload when ``page`` or ``limit`` is given."""
    try:
        if wants_pagination(params):
            limit_default = default_limit or get_settings().default_page_size
            page, limit = pagination_args(params, limit_default)
            result = repo.find_with_pagination(filter_spec or {}, page, limit).to_dict()
            result["items"] = [_present(doc, present) for doc in result["items"]]
            return success_response(ResponseCode.OK, result)
        docs = repo.find_all(filter_spec or None)
    except HANDLED_ERRORS as exc:
        return _error(f"list {repo.collection.name}", exc)
    return success_response(ResponseCode.OK, [_present(doc, present) for doc in docs])


def run_query(action: str, query: Callable[[], Any]) -> JSONResponse:
    """Run a read-only repository query and wrap its result."""
    try:
        result = query()
    except HANDLED_ERRORS as exc:
        return _error(action, exc)
    return success_response(ResponseCode.OK, result)
