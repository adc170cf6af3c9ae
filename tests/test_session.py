from __future__ import annotations

from cafe_pos.models import Waiter
from cafe_pos.session import Session


def test_authenticate_is_plain_pin_match():
    session = Session()

    assert session.authenticate("w1", "123")
    assert not session.authenticate("w1", "124")
    assert not session.authenticate("w1", "")
    assert not session.authenticate("ghost", "123")
    assert session.active is None


def test_login_binds_and_logout_clears():
    session = Session()

    assert not session.login("w2", "999")
    assert session.active is None

    assert session.login("w2", "000")
    assert session.active.name == "Sarah Martin"

    session.logout()
    assert session.active is None


def test_pin_length_comes_from_roster():
    session = Session([Waiter(waiter_id="x", name="Long Pin", pin="123456")])

    assert session.authenticate("x", "123456")
    assert not session.authenticate("x", "123")
