import os
from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["PYTEST_RUN"] = "1"

# Load environment variables for tests
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test')

from nanny_booking.main import app
from nanny_booking.database import get_db
from nanny_booking.models.base import BaseModel
from nanny_booking.pricing import HourlyPricingUnavailable, UnifiedPricingCalculator, get_pricing_calculator


async def unavailable_fetch(payload):
    raise HourlyPricingUnavailable("not configured in tests")


@pytest.fixture
def Session():
    """In-memory database shared by the app and the test for one test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    BaseModel.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, expire_on_commit=False)

    def override_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_pricing_calculator] = lambda: UnifiedPricingCalculator(fetch=unavailable_fetch)
    yield Session
    app.dependency_overrides.clear()


@pytest.fixture
def client(Session):
    return TestClient(app)
