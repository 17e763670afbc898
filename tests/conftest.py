"""
Shared test fixtures: default parameters, a computed projection, test client.
"""

import pytest
from fastapi.testclient import TestClient

from millplan.calculators.financials import evaluate
from millplan.main import app
from millplan.parameters import default_parameters
from millplan.routers.scenarios import clear_scenarios


@pytest.fixture
def params():
    """The default Parameter Set."""
    return default_parameters()


@pytest.fixture
def result(params):
    """Successful projection of the defaults."""
    projection = evaluate(params)
    assert projection.ok
    return projection


@pytest.fixture
def client():
    """FastAPI test client with an empty scenario store."""
    clear_scenarios()
    yield TestClient(app)
    clear_scenarios()
