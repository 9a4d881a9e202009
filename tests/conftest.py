"""
Shared pytest fixtures for tournament organizer tests.
"""
import pytest
import random
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from tourney.models import Match


@pytest.fixture
def client():
    """Create a test client."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch):
    """Point the app's data directory at an empty temporary directory."""
    import app as app_module

    data_dir = tmp_path / "data"
    data_dir.mkdir()
    monkeypatch.setattr(app_module, 'DATA_DIR', str(data_dir))
    return data_dir


@pytest.fixture
def rng():
    """Seeded random source so draws are reproducible."""
    return random.Random(42)


@pytest.fixture
def six_teams():
    return ["A", "B", "C", "D", "E", "F"]


@pytest.fixture
def scheduled_match():
    """A single scheduled match between X and Y."""
    return Match(id="m1", team1="X", team2="Y")
