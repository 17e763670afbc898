"""
HTTP API tests via FastAPI TestClient.

Tests:
1-2.   Health + defaults/specs
3-7.   /evaluate (success, in-band failure, request validation, non-finite bodies)
8-11.  /statements, /sensitivity (incl. fractional bounds), /breakeven
12-13. /export and /report downloads
14-19. Scenario lifecycle
"""

import pytest

from millplan.config import settings


# ============================================================
# Basics
# ============================================================

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_defaults_and_specs(client):
    defaults = client.get("/api/projection/defaults").json()
    assert defaults["primary_price"] == 45
    assert defaults["days_per_month"] == 24

    specs = client.get("/api/projection/specs").json()
    assert specs["fields"]["primary_yield_pct"]["group"] == "Production"
    keys = [v["key"] for v in specs["sensitivity_variables"]]
    assert keys == [
        "primary_price", "raw_material_price", "primary_yield",
        "interest_rate", "processing_rate", "byproduct_sale",
    ]


# ============================================================
# Evaluate
# ============================================================

def test_evaluate_defaults(client):
    resp = client.post("/api/projection/evaluate", json={})
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert data["annual_revenue"] == pytest.approx(90_691_200)
    assert data["warnings"] == []
    assert data["error"] is None


def test_evaluate_overrides_merge_with_defaults(client):
    data = client.post("/api/projection/evaluate",
                       json={"primary_yield_pct": 70, "byproduct_sale_pct": 40}).json()
    assert data["ok"] is True
    assert data["byproduct_limit_hit"] is True
    assert data["primary_price"] == 45
    assert len(data["warnings"]) == 1


def test_evaluate_failure_is_in_band(client):
    resp = client.post("/api/projection/evaluate", json={"primary_price": 0})
    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is False
    assert data["kind"] == "InvalidInput"
    assert data["error"] == "Yield, Price, and Capex must be greater than 0"
    assert "net_profit" not in data


@pytest.mark.parametrize("body", [
    {"poha_colour": 3},
    {"primary_price": "cheap"},
])
def test_evaluate_rejects_bad_request(client, body):
    assert client.post("/api/projection/evaluate", json=body).status_code == 422


@pytest.mark.parametrize("raw", ['{"processing_rate": NaN}', '{"rent_per_month": Infinity}'])
def test_non_finite_body_rejected(client, raw):
    """Non-finite numbers never reach the engine or the JSON response."""
    headers = {"Content-Type": "application/json"}
    assert client.post("/api/projection/evaluate", content=raw, headers=headers).status_code == 422
    sensitivity = '{"params": ' + raw + "}"
    assert client.post("/api/projection/sensitivity", content=sensitivity, headers=headers).status_code == 422
    assert client.post("/api/projection/sensitivity", content='{"low": -Infinity}',
                       headers=headers).status_code == 422


# ============================================================
# Statements / sensitivity / breakeven
# ============================================================

def test_statements(client):
    resp = client.post("/api/projection/statements", json={})
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"profit_and_loss", "balance_sheet", "production_summary", "kpis", "warnings"}
    assert data["profit_and_loss"][0]["label"] == "Total Revenue"
    assert client.post("/api/projection/statements", json={"primary_yield_pct": 0}).status_code == 400


def test_sensitivity(client):
    resp = client.post("/api/projection/sensitivity", json={"variable": "interest_rate"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["variable"] == "interest_rate"
    assert data["base_value"] == 9
    assert len(data["points"]) == 21
    assert data["points"][0]["change"] == -20

    too_wide = {"low": -1000, "high": 1000 * settings.SENSITIVITY_STEP_PCT}
    assert client.post("/api/projection/sensitivity", json=too_wide).status_code == 400
    assert client.post("/api/projection/sensitivity", json={"variable": "colour"}).status_code == 422


def test_sensitivity_fractional_bounds(client):
    resp = client.post("/api/projection/sensitivity", json={"low": -5.5, "high": 5.5})
    assert resp.status_code == 200
    changes = [pt["change"] for pt in resp.json()["points"]]
    assert changes == pytest.approx([-5.5, -3.5, -1.5, 0.5, 2.5, 4.5])


def test_breakeven(client):
    resp = client.post("/api/projection/breakeven", json={"basis": "Net Profit", "chart_points": 10})
    assert resp.status_code == 200
    data = resp.json()
    assert data["basis"] == "Net Profit"
    assert len(data["chart"]) == 11
    assert data["above_breakeven"] is True

    failed = client.post("/api/projection/breakeven", json={"params": {"primary_yield_pct": 0}})
    assert failed.status_code == 400


# ============================================================
# Downloads
# ============================================================

def test_export_download(client):
    resp = client.post("/api/projection/export", json={"hours_per_day": 12})
    assert resp.status_code == 200
    assert "attachment" in resp.headers["content-disposition"]
    assert ".json" in resp.headers["content-disposition"]
    assert resp.json()["hours_per_day"] == 12


def test_report_download(client):
    resp = client.post("/api/projection/report", json={})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")
    assert client.post("/api/projection/report", json={"machinery_cost": 0}).status_code == 400


# ============================================================
# Scenarios
# ============================================================

def _create(client, **params):
    resp = client.post("/api/scenarios", json={"params": params})
    assert resp.status_code == 200
    return resp.json()["scenario_id"]


def test_scenario_create_and_get(client):
    sid = _create(client, hours_per_day=12)
    data = client.get(f"/api/scenarios/{sid}").json()
    assert data["scenario_id"] == sid
    assert data["projection"]["hours_per_day"] == 12
    assert data["projection"]["ok"] is True


def test_scenario_patch_keeps_other_edits(client):
    sid = _create(client, hours_per_day=12)
    data = client.patch(f"/api/scenarios/{sid}", json={"primary_price": 50}).json()
    assert data["projection"]["hours_per_day"] == 12
    assert data["projection"]["primary_price"] == 50

    failed = client.patch(f"/api/scenarios/{sid}", json={"primary_yield_pct": 0}).json()
    assert failed["projection"]["ok"] is False
    assert failed["projection"]["hours_per_day"] == 12


def test_scenario_reset(client):
    sid = _create(client, hours_per_day=12)
    data = client.post(f"/api/scenarios/{sid}/reset").json()
    assert data["projection"]["hours_per_day"] == 10


def test_scenario_downloads(client):
    sid = _create(client)
    assert client.get(f"/api/scenarios/{sid}/statements").status_code == 200
    export = client.get(f"/api/scenarios/{sid}/export")
    assert export.json()["primary_price"] == 45
    pdf = client.get(f"/api/scenarios/{sid}/pdf")
    assert pdf.content.startswith(b"%PDF")


def test_scenario_unknown_and_delete(client):
    assert client.get("/api/scenarios/nope").status_code == 404
    assert client.patch("/api/scenarios/nope", json={}).status_code == 404
    sid = _create(client)
    assert client.delete(f"/api/scenarios/{sid}").status_code == 200
    assert client.get(f"/api/scenarios/{sid}").status_code == 404
    assert client.delete(f"/api/scenarios/{sid}").status_code == 404


def test_scenario_patch_rejects_non_finite_and_keeps_state(client):
    sid = _create(client, hours_per_day=12)
    resp = client.patch(f"/api/scenarios/{sid}", content='{"primary_price": NaN}',
                        headers={"Content-Type": "application/json"})
    assert resp.status_code == 422
    data = client.get(f"/api/scenarios/{sid}").json()
    assert data["projection"]["ok"] is True
    assert data["projection"]["primary_price"] == 45
