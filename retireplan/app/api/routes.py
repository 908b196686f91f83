"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict, List, Tuple

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from retireplan.core.projection import compare_profiles, compare_retirement_returns, run_projection
from retireplan.core.rates import resolve_rates
from retireplan.domain.plan import InvalidInputError, protection_need, require_valid_plan
from retireplan.models import ProjectionInput
from retireplan.presentation import chart_data, export_csv, export_json
from retireplan.schemas.health import PingResponse
from retireplan.schemas.projection import ComparisonRequest, PlanRequest, ProjectionResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("request failed schema validation: %d error(s)", exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidInputError)
def _handle_invalid_input(exc: InvalidInputError):
    """Return cross-field plan errors as a 400 with the collected messages."""
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _prepared_inputs(plan: PlanRequest) -> Tuple[ProjectionInput, List[str]]:
    preparation = require_valid_plan(
        plan,
        default_horizon_years=current_app.config["DEFAULT_TARGET_HORIZON_YEARS"],
        default_inflation_rate=current_app.config["DEFAULT_INFLATION_RATE"],
    )
    return preparation.inputs, preparation.warnings


def _plan_from_body() -> PlanRequest:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    return PlanRequest.model_validate(raw_payload)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify(PingResponse().model_dump())


@api_bp.get("/rates/<profile>")
def rates(profile: str) -> Any:
    """Return the return-rate pair a risk profile resolves to."""
    return jsonify(resolve_rates(profile).model_dump(mode="json"))


@api_bp.post("/projection")
def projection() -> Any:
    """Full projection: both series, depletion, shortfall and summary."""
    plan = _plan_from_body()
    inputs, warnings = _prepared_inputs(plan)
    result = run_projection(inputs)
    protection = protection_need(plan) if plan.protection is not None else None
    response = ProjectionResponse(result=result, warnings=warnings, protection=protection)
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/projection/chart")
def projection_chart() -> Any:
    """Parallel year, balance and cash-flow series for charting."""
    inputs, _ = _prepared_inputs(_plan_from_body())
    return jsonify(chart_data(run_projection(inputs)))


@api_bp.post("/projection/protection")
def projection_protection() -> Any:
    """Life-insurance need and coverage gap for the plan's protection answers."""
    plan = _plan_from_body()
    _prepared_inputs(plan)
    return jsonify(protection_need(plan).model_dump(mode="json"))


@api_bp.post("/projection/compare")
def projection_compare() -> Any:
    """Same plan under a conservative and an aggressive retirement-phase return."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ComparisonRequest.model_validate(raw_payload)
    inputs, _ = _prepared_inputs(payload.plan)
    comparison = compare_retirement_returns(
        inputs,
        conservative_rate=payload.conservativeRate,
        aggressive_rate=payload.aggressiveRate,
    )
    return jsonify(comparison.model_dump(mode="json"))


@api_bp.post("/projection/profiles")
def projection_profiles() -> Any:
    """Headline outcome under each built-in risk profile."""
    inputs, _ = _prepared_inputs(_plan_from_body())
    outcomes = compare_profiles(inputs)
    return jsonify({name: outcome.model_dump(mode="json") for name, outcome in outcomes.items()})


@api_bp.post("/projection/export")
def projection_export() -> Any:
    """Download the year-by-year table as CSV (default) or JSON."""
    export_format = request.args.get("format", "csv").lower()
    if export_format not in ("csv", "json"):
        return jsonify({"error": [f"unsupported export format {export_format!r}"]}), HTTPStatus.BAD_REQUEST

    inputs, _ = _prepared_inputs(_plan_from_body())
    result = run_projection(inputs)

    if export_format == "json":
        return Response(export_json(result), mimetype="application/json")
    return Response(
        export_csv(result),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=retirement-projection.csv"},
    )
