"""
Scenario API: in-memory working copies of a Parameter Set.

POST   /api/scenarios              start from defaults (plus optional overrides)
GET    /api/scenarios/{id}         current inputs and projection
PATCH  /api/scenarios/{id}         change some fields, recompute
POST   /api/scenarios/{id}/reset   back to defaults
GET    /api/scenarios/{id}/statements
GET    /api/scenarios/{id}/export  JSON download
GET    /api/scenarios/{id}/pdf     PDF report
DELETE /api/scenarios/{id}

Nothing is persisted; scenarios are lost on restart.
"""

import logging
import uuid
from collections import OrderedDict

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..scenario import Scenario
from ..schemas import ParameterOverrides, ScenarioCreate, merge_overrides
from .projection import export_response, pdf_response, projection_response, statements_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scenarios", tags=["scenarios"])

# Oldest first, evicted past MAX_SCENARIOS
_scenarios: "OrderedDict[str, Scenario]" = OrderedDict()


def _get_scenario(scenario_id: str) -> Scenario:
    scenario = _scenarios.get(scenario_id)
    if scenario is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario


def _scenario_response(scenario_id: str, scenario: Scenario) -> dict:
    return {"scenario_id": scenario_id, "projection": projection_response(scenario.result)}


@router.post("")
def create_scenario(request: ScenarioCreate):
    scenario_id = str(uuid.uuid4())
    scenario = Scenario(merge_overrides(request.params))
    _scenarios[scenario_id] = scenario
    while len(_scenarios) > settings.MAX_SCENARIOS:
        evicted, _ = _scenarios.popitem(last=False)
        logger.info("Evicted scenario %s", evicted)
    return _scenario_response(scenario_id, scenario)


@router.get("/{scenario_id}")
def get_scenario(scenario_id: str):
    return _scenario_response(scenario_id, _get_scenario(scenario_id))


@router.patch("/{scenario_id}")
def update_scenario(scenario_id: str, overrides: ParameterOverrides):
    scenario = _get_scenario(scenario_id)
    scenario.update(**overrides.model_dump(exclude_none=True))
    return _scenario_response(scenario_id, scenario)


@router.post("/{scenario_id}/reset")
def reset_scenario(scenario_id: str):
    scenario = _get_scenario(scenario_id)
    scenario.reset()
    return _scenario_response(scenario_id, scenario)


@router.get("/{scenario_id}/statements")
def scenario_statements(scenario_id: str):
    return statements_response(_get_scenario(scenario_id).result)


@router.get("/{scenario_id}/export")
def export_scenario(scenario_id: str):
    return export_response(_get_scenario(scenario_id).result)


@router.get("/{scenario_id}/pdf")
def scenario_pdf(scenario_id: str):
    return pdf_response(_get_scenario(scenario_id).result)


@router.delete("/{scenario_id}")
def delete_scenario(scenario_id: str):
    # May already be gone through eviction
    if _scenarios.pop(scenario_id, None) is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return {"ok": True}


def clear_scenarios() -> None:
    _scenarios.clear()
