from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import printshop.persistence.db as db
from printshop.domain.models import Customer, CustomerTier, Material
from printshop.domain.pricing import Catalog
from printshop.persistence.models import Base


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite"


@pytest.fixture(scope="session", autouse=True)
def configure_test_engine(test_db_path: Path):
    engine = create_engine(
        f"sqlite+pysqlite:///{test_db_path}",
        future=True,
        connect_args={"check_same_thread": False},
    )
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

    db.engine = engine
    db.SessionLocal = TestSessionLocal

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def clean_db(configure_test_engine):
    Base.metadata.drop_all(bind=configure_test_engine)
    Base.metadata.create_all(bind=configure_test_engine)
    yield


@pytest.fixture()
def client(clean_db):
    from printshop.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session(clean_db):
    with db.session_scope() as s:
        yield s


def _prices(end_customer: int, retail: int, wholesale: int, reseller: int, corporate: int) -> dict[CustomerTier, int]:
    return {
        CustomerTier.END_CUSTOMER: end_customer,
        CustomerTier.RETAIL: retail,
        CustomerTier.WHOLESALE: wholesale,
        CustomerTier.RESELLER: reseller,
        CustomerTier.CORPORATE: corporate,
    }


@pytest.fixture()
def catalog() -> Catalog:
    return Catalog.from_records(
        [
            Customer(id=1, name="Budi", tier=CustomerTier.RETAIL),
            Customer(id=2, name="Citra", tier=CustomerTier.END_CUSTOMER),
            Customer(id=3, name="Dewi", tier=CustomerTier.WHOLESALE),
        ],
        [
            Material(id=1, name="Banner", prices=_prices(25000, 22000, 20000, 18000, 15000)),
            Material(id=2, name="Artpaper", prices=_prices(15000, 13000, 11000, 10000, 8000)),
            Material(id=3, name="Sticker", prices={CustomerTier.RETAIL: 45000}),
        ],
    )


@pytest.fixture()
def day() -> date:
    return date(2026, 3, 10)
