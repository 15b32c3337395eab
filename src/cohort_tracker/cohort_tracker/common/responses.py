from __future__ import annotations

from typing import Optional

from flask import jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
)


def status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, AuthenticationError):
        return 401
    return 400


def json_error(exc: DomainError, **extra):
    body = {"error": str(exc)}
    body.update(extra)
    return jsonify(body), status_for(exc)


def server_error(message: str = "Internal server error"):
    return jsonify({"error": message}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def optional_arg(name: str) -> Optional[str]:
    value = request.args.get(name)
    return value.strip() if value and value.strip() else None
