"""Request parsing and response helpers for the JSON API."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from flask import jsonify, request

from causeway.errors import ValidationError
from causeway.schemas import RequestSchema, parse_payload

E = TypeVar('E', bound=Enum)
S = TypeVar('S', bound=RequestSchema)


def json_body() -> Any:
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError('Request body must be valid JSON')
    return payload


def parse_body(schema: type[S]) -> S:
    """Validate the JSON body against ``schema``."""
    return parse_payload(schema, json_body())


def enum_arg(enum_cls: type[E], name: str) -> E | None:
    """Optional enum-valued query argument; unknown values are rejected."""
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return enum_cls(raw.upper())
    except ValueError as exc:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f"{name}: must be one of {allowed}") from exc


def bool_arg(name: str) -> bool:
    return request.args.get(name, '').lower() in ('1', 'true', 'yes')


def success(data: Any, status: int = 200):
    return jsonify({'success': True, 'data': data}), status


def deleted(message: str):
    return jsonify({'success': True, 'message': message})


__all__ = ['json_body', 'parse_body', 'enum_arg', 'bool_arg', 'success', 'deleted']
