from datetime import date
from types import SimpleNamespace

import pytest

from billtrack.models.money import Money
from billtrack.models.payment import Payment
from billtrack.settings import Settings

OWNER = "owner-1"


@pytest.fixture()
def owner() -> str:
    return OWNER


@pytest.fixture()
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture()
def settings() -> Settings:
    return Settings(backup_enabled=False)


def make_payment(amount, status="pending", paid_date=None, client_id="c1", **kw) -> Payment:
    return Payment(owner_id=OWNER, client_id=client_id, amount=amount,
                   status=status, paid_date=paid_date, **kw)


def row(amount, status="paid", paid_date=None, client_id="c1"):
    """Ligne brute telle que fournie par le collaborateur de persistance."""
    return SimpleNamespace(amount=amount, status=status, paid_date=paid_date, client_id=client_id)


@pytest.fixture()
def scenario_payments():
    return [
        make_payment(Money("100.00"), "paid", date(2024, 3, 10)),
        make_payment(Money("50.00"), "pending"),
        make_payment(Money("25.00"), "overdue"),
    ]
