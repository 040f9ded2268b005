"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import Request, jsonify
from werkzeug.exceptions import BadRequest


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload of the form ``{"error": code, "message": text, ...}``."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    return ProblemResponse(error=error, status=status, message=message, extra=extra)


def not_found(resource: str, identifier: str, **extra: Any) -> ProblemResponse:
    """Problem payload for a lookup that matched nothing."""

    return problem_response(
        "not_found",
        status=404,
        message=f"No {resource} found for '{identifier}'",
        **extra,
    )


def read_json_object(req: Request) -> dict[str, Any]:
    """Extract the JSON object body from ``req`` or raise ``BadRequest``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")
    return dict(data)


__all__ = ["ProblemResponse", "not_found", "problem_response", "read_json_object"]
