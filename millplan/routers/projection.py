"""
Projection API: stateless endpoints over the engine.

GET  /api/projection/defaults     default Parameter Set
GET  /api/projection/specs        form metadata + sensitivity variables
POST /api/projection/evaluate     run the engine (missing fields use defaults)
POST /api/projection/statements   P&L, balance sheet, production summary, KPIs
POST /api/projection/sensitivity  one-variable sensitivity scan
POST /api/projection/breakeven    breakeven volume/revenue + chart series
POST /api/projection/export       JSON download of the full result
POST /api/projection/report       PDF report
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..calculators.breakeven import breakeven
from ..calculators.financials import evaluate
from ..calculators.sensitivity import scan_length, sensitivity_scan
from ..config import settings
from ..export import export_filename, export_json
from ..parameters import DEFAULT_PARAMETERS, PARAM_GROUPS, PARAM_SPECS, SensitivityVariable
from ..pdf_generator import generate_projection_pdf
from ..results import Projection
from ..schemas import BreakevenRequest, ParameterOverrides, SensitivityRequest, merge_overrides
from ..statements import balance_sheet, kpi_cards, production_summary, profit_and_loss, warnings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projection", tags=["projection"])


def projection_response(projection: Projection) -> dict:
    """Flat record plus an ok flag and any warnings."""
    body = {"ok": projection.ok, **projection.to_record()}
    body["warnings"] = warnings(projection) if projection.ok else []
    return body


def require_success(projection: Projection) -> None:
    if not projection.ok:
        raise HTTPException(status_code=400, detail=projection.error)


def statements_response(projection: Projection) -> dict:
    require_success(projection)
    return {
        "profit_and_loss": profit_and_loss(projection),
        "balance_sheet": balance_sheet(projection),
        "production_summary": production_summary(projection),
        "kpis": kpi_cards(projection),
        "warnings": warnings(projection),
    }


def export_response(projection: Projection) -> Response:
    return Response(
        content=export_json(projection),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


def pdf_response(projection: Projection) -> Response:
    require_success(projection)
    pdf_bytes = generate_projection_pdf(projection, company_name=settings.COMPANY_NAME)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(extension="pdf")}"'},
    )


@router.get("/defaults")
def get_defaults():
    return dict(DEFAULT_PARAMETERS)


@router.get("/specs")
def get_specs():
    return {
        "groups": PARAM_GROUPS,
        "fields": PARAM_SPECS,
        "sensitivity_variables": [
            {"key": v.value, "label": v.label, "unit": v.unit} for v in SensitivityVariable
        ],
    }


@router.post("/evaluate")
def evaluate_projection(overrides: ParameterOverrides):
    """A failed projection is still a 200: ok=false with kind and error."""
    return projection_response(evaluate(merge_overrides(overrides)))


@router.post("/statements")
def get_statements(overrides: ParameterOverrides):
    return statements_response(evaluate(merge_overrides(overrides)))


@router.post("/sensitivity")
def run_sensitivity(request: SensitivityRequest):
    step = settings.SENSITIVITY_STEP_PCT
    points = scan_length(request.low, request.high, step)
    if points > settings.SENSITIVITY_MAX_POINTS:
        raise HTTPException(
            status_code=400,
            detail=f"Range too wide: {points} points (max {settings.SENSITIVITY_MAX_POINTS})",
        )
    params = merge_overrides(request.params)
    logger.info("Sensitivity scan: %s over %s..%s%%", request.variable.value, request.low, request.high)
    return {
        "variable": request.variable.value,
        "label": request.variable.label,
        "unit": request.variable.unit,
        "base_value": request.variable.get(params),
        "points": [
            pt.model_dump()
            for pt in sensitivity_scan(params, request.variable, request.low, request.high, step)
        ],
    }


@router.post("/breakeven")
def run_breakeven(request: BreakevenRequest):
    projection = evaluate(merge_overrides(request.params))
    require_success(projection)
    result = breakeven(
        projection,
        basis=request.basis,
        chart_points=request.chart_points,
        headroom=settings.BREAKEVEN_CHART_HEADROOM,
    )
    return result.model_dump()


@router.post("/export")
def export_projection(overrides: ParameterOverrides):
    return export_response(evaluate(merge_overrides(overrides)))


@router.post("/report")
def projection_report(overrides: ParameterOverrides):
    return pdf_response(evaluate(merge_overrides(overrides)))
