from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from cafe_pos import config
from cafe_pos.models import Product
from cafe_pos.persistence import SnapshotStore
from cafe_pos.store import PosStore


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def debug_log(tmp_path, monkeypatch):
    path = tmp_path / "debug.log"
    monkeypatch.setattr(config, "DEBUG_LOG_PATH", str(path))
    return path


@pytest.fixture
def snapshots(tmp_path):
    return SnapshotStore(tmp_path / "pos.db")


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(snapshots, clock):
    pos = PosStore(snapshots, clock=clock)
    pos.initialize()
    return pos


@pytest.fixture
def espresso():
    return Product(product_id="1", name="Espresso", category="Café", price=Decimal("2.50"))


@pytest.fixture
def croissant():
    return Product(product_id="4", name="Croissant", category="Boulangerie", price=Decimal("2.00"))
