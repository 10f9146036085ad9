"""
Shared pytest fixtures.
"""

import sys
import random
from pathlib import Path

import pytest

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from config.database import UserDatabase
from webapp.app import create_app
from webapp.services.auth_service import AuthService
from webapp.services.itinerary_service import ItineraryPlanner

RIO = (-22.9068, -43.1729)


@pytest.fixture
def db(tmp_path):
    """File-backed SQLite database for one test."""
    database = UserDatabase(f"sqlite:///{tmp_path / 'ecotrip_test.db'}")
    database.init_database()
    yield database
    database.dispose()


@pytest.fixture
def auth_service(db):
    return AuthService(db)


@pytest.fixture
def planner():
    return ItineraryPlanner(geocoder=lambda destination: RIO, delay=0, rng=random.Random(42))


@pytest.fixture
def app(auth_service, planner):
    app = create_app({'TESTING': True}, auth_service=auth_service, planner=planner)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
