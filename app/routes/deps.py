"""Shared FastAPI dependencies: collaborators, secret check, body and form parsing."""

from __future__ import annotations

import hmac
from collections.abc import Awaitable, Callable
from typing import Any, Optional, TypeVar

from fastapi import Header, Request
from pydantic import TypeAdapter, ValidationError

from app.config import Settings
from app.errors import BadRequestError, MissingParameterError, SecretInvalidError
from app.repositories.database import DatabaseRepository
from app.repositories.email import EmailRepository
from app.repositories.notifications import NotificationRepository

T = TypeVar("T")

SECRET_HEADER = "Secret-hash"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> DatabaseRepository:
    return request.app.state.database


def get_email_repository(request: Request) -> Optional[EmailRepository]:
    return request.app.state.email_repository


def get_notification_repository(request: Request) -> Optional[NotificationRepository]:
    return request.app.state.notification_repository


async def require_secret(
    request: Request,
    secret_hash: Optional[str] = Header(default=None, alias=SECRET_HEADER),
) -> None:
    """Reject the request (403) unless `Secret-hash` matches the configured secret."""
    expected = get_settings(request).secret_hash
    if not expected or secret_hash is None:
        raise SecretInvalidError()
    if not hmac.compare_digest(secret_hash.encode("utf-8"), expected.encode("utf-8")):
        raise SecretInvalidError()


def receive_object(model: type[T], type_name: Optional[str] = None) -> Callable[..., Awaitable[T]]:
    """Dependency that parses the JSON body as `model` or raises BadRequestError."""
    adapter: TypeAdapter[Any] = TypeAdapter(model)
    name = type_name or getattr(model, "__name__", str(model))

    async def _dependency(request: Request) -> T:
        try:
            payload = await request.json()
            return adapter.validate_python(payload)
        except (ValueError, ValidationError) as exc:
            raise BadRequestError(name) from exc

    return _dependency


async def get_param(request: Request, name: str) -> str:
    """Read a form field, falling back to the query string."""
    form = await request.form()
    value = form.get(name)
    if value is None:
        value = request.query_params.get(name)
    if value is None or not isinstance(value, str):
        raise MissingParameterError(name)
    return value
