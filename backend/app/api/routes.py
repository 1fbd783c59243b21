"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from backend.core.adjustments import ShockNotActiveError, UnknownActionError, adjust
from backend.core.command import parse_command, to_command
from backend.core.normalize import normalize_with_warnings
from backend.core.presets import PRESETS, UnknownPresetError, apply_preset
from backend.core.projection import project
from backend.schemas.ping import PingResponse
from backend.schemas.simulation import (
    AdjustRequest,
    CommandRequest,
    NormalizationResult,
    ProjectionResponse,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


class PayloadError(ValueError):
    pass


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(UnknownPresetError)
def _handle_unknown_preset(exc: UnknownPresetError):
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


@api_bp.errorhandler(PayloadError)
@api_bp.errorhandler(UnknownActionError)
@api_bp.errorhandler(ShockNotActiveError)
def _handle_bad_request(exc: ValueError):
    return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST


def _json_object(optional: bool = False) -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=optional)
    if payload is None and optional:
        return {}
    if not isinstance(payload, dict):
        raise PayloadError("request JSON body must be an object")
    return payload


def _respond(normalized: NormalizationResult, command: Optional[str] = None) -> Any:
    response = ProjectionResponse(
        config=normalized.config,
        result=project(normalized.config),
        warnings=normalized.warnings,
        command=command,
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse()
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Normalize a raw parameter bundle and project it."""
    normalized = normalize_with_warnings(_json_object())
    logger.info("projection requested: %s", normalized.config.model_dump())
    return _respond(normalized, command=to_command(normalized.config))


@api_bp.post("/projection/command")
def projection_from_command() -> Any:
    """Project the parameters of a ``/dca ...`` text command."""
    payload = CommandRequest.model_validate(_json_object())
    normalized = parse_command(payload.text)
    logger.info("command %r parsed to %s", payload.text, normalized.config.model_dump())
    return _respond(normalized, command=to_command(normalized.config))


@api_bp.post("/projection/adjust")
def projection_adjust() -> Any:
    """Apply a step action to the caller's current configuration."""
    payload = AdjustRequest.model_validate(_json_object())
    normalized = adjust(payload.config, payload.action)
    return _respond(normalized, command=to_command(normalized.config))


@api_bp.get("/presets")
def presets() -> Any:
    return jsonify({"presets": PRESETS})


@api_bp.post("/presets/<name>")
def preset(name: str) -> Any:
    """Overlay a named preset on the (optional) current configuration in the body."""
    normalized = apply_preset(name, _json_object(optional=True))
    return _respond(normalized, command=to_command(normalized.config))
