import pytest
from fastapi.testclient import TestClient

from calibrator.api.endpoints import calibration, tally
from calibrator.main import app
from calibrator.services.calibration_engine import SessionRegistry
from calibrator.services.tally import JsonStore, TallyBoard


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "store.json")


@pytest.fixture
def client(store):
    """TestClient wired to a fresh session registry and a temp-file tally board."""
    registry = SessionRegistry()
    board = TallyBoard(store)
    app.dependency_overrides[calibration.get_registry] = lambda: registry
    app.dependency_overrides[tally.get_board] = lambda: board

    yield TestClient(app)

    app.dependency_overrides.clear()
