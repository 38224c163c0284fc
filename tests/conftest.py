"""
Pytest configuration and fixtures
"""
import os

# Must be set before shared.core.config is imported
os.environ["LEASING_DATABASE_URL"] = "sqlite://"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shared.core.database import Base, LeasingSessionLocal, get_leasing_db, leasing_engine
from shared.models.users import Owner, Tenant
import leasing_service.app.models  # noqa: F401
from leasing_service.app.crud.space_sites import space_registry
from leasing_service.app.crud.system.notification_dispatch import get_notification_sink
from leasing_service.app.enum.space_sites_enum import SpaceType
from leasing_service.app.schemas.leasing.rental_contract_schemas import RentalContractCreate
from leasing_service.app.schemas.parking_access.parking_facility_schemas import ParkingFacilityCreate
from leasing_service.app.schemas.space_sites.commercial_space_schemas import CommercialSpaceCreate


class RecordingSink:
    """Notification sink that keeps everything it is handed."""

    def __init__(self):
        self.published = []

    def publish(self, topic, event):
        self.published.append((topic, event))

    def types(self):
        return [event.type for _, event in self.published]

    def topics(self):
        return [topic for topic, _ in self.published]


@pytest.fixture(scope="function")
def db():
    """Fresh schema per test on the shared in-memory connection"""
    Base.metadata.drop_all(bind=leasing_engine)
    Base.metadata.create_all(bind=leasing_engine)
    session = LeasingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def owner(db):
    owner = Owner(full_name="Olivia Owner", email="olivia@example.com")
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture
def tenant(db):
    tenant = Tenant(full_name="Tomas Tenant", email="tomas@example.com")
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


@pytest.fixture
def make_space(db, owner):
    """Register an available space; keyword overrides go to CommercialSpaceCreate."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = dict(
            name=f"Suite {100 + counter['n']}",
            area=Decimal("50"),
            price_per_month=Decimal("1000"),
            space_type=SpaceType.OFFICE,
            owner_id=owner.id,
        )
        data.update(overrides)
        space, _ = space_registry.register_space(db, CommercialSpaceCreate(**data))
        return space

    return _make


@pytest.fixture
def space(make_space):
    return make_space()


@pytest.fixture
def space_with_parking(make_space):
    return make_space(parking=ParkingFacilityCreate(number_of_spots=10, price_per_spot=Decimal("25")))


@pytest.fixture
def contract_payload(tenant):
    """Build a RentalContractCreate for 2024-01-01..2024-12-31 at 1000/month."""

    def _build(space, **overrides):
        data = dict(
            space_id=space.id,
            tenant_id=tenant.id,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
            monthly_rent=Decimal("1000"),
            security_deposit=Decimal("2000"),
        )
        data.update(overrides)
        return RentalContractCreate(**data)

    return _build


@pytest.fixture
def client(db, sink):
    from leasing_service.app.main import app

    app.dependency_overrides[get_leasing_db] = lambda: db
    app.dependency_overrides[get_notification_sink] = lambda: sink
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def session_pair(tmp_path):
    """Two sessions on separate connections to one file-backed database"""
    engine = create_engine(f"sqlite:///{tmp_path / 'leasing.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autoflush=False, bind=engine)
    first, second = factory(), factory()
    try:
        yield first, second
    finally:
        first.close()
        second.close()
        engine.dispose()
