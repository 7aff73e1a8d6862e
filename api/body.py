"""
JSON request body reading with a hard size ceiling.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from api.errors import ClientInputError, PayloadTooLargeError
from config.settings import config

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json_body(request: Request, limit: int = config.max_body_size) -> Dict[str, Any]:
    """
    Read and decode the request body as a JSON object.

    A declared ``Content-Length`` above ``limit`` is refused before any
    byte is read; otherwise the stream is consumed chunk by chunk and
    abandoned as soon as it grows past ``limit``.  An empty body decodes
    to ``{}``.
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError()

    buffer = bytearray()
    async for chunk in request.stream():
        buffer.extend(chunk)
        if len(buffer) > limit:
            raise PayloadTooLargeError()

    if not buffer:
        return {}

    try:
        payload = json.loads(buffer)
    except ValueError:
        raise ClientInputError("Invalid JSON")

    if not isinstance(payload, dict):
        raise ClientInputError("Request body must be a JSON object")
    return payload


async def parse_body(request: Request, model: Type[ModelT]) -> ModelT:
    """Read the body and load it into ``model``; wrong field types are a 400."""
    payload = await read_json_body(request, request.app.state.settings.max_body_size)
    try:
        return model.model_validate(payload)
    except ValidationError:
        raise ClientInputError("Invalid request payload")
