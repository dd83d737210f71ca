import os

import pytest

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["AUTO_SEED"] = "0"

from lineup_model import AXES  # noqa: E402

from calciotto.db import SessionLocal, engine  # noqa: E402
from calciotto.models import Base, Player, PlayerRatings, Signup  # noqa: E402
from calciotto.services.match import create_match  # noqa: E402
from calciotto.services.notify import Publisher  # noqa: E402


class RecordingPublisher(Publisher):
    def __init__(self):
        self.messages = []

    def publish(self, topic, message):
        self.messages.append((topic, message))

    def types(self):
        return [message["type"] for _, message in self.messages]


@pytest.fixture
def db():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    session = SessionLocal()
    yield session
    SessionLocal.remove()


@pytest.fixture
def publisher():
    return RecordingPublisher()


def ratings_of(value) -> dict:
    if isinstance(value, dict):
        return value
    if isinstance(value, int):
        return {axis: value for axis in AXES}
    return dict(zip(AXES, value))


def add_player(db, ratings=3, name="Player") -> int:
    player = Player(name=name, surname="")
    db.add(player)
    db.flush()
    if ratings is not None:
        db.add(PlayerRatings(player_id=player.id, **ratings_of(ratings)))
    db.commit()
    return player.id


def add_match(db, sport="FIVE") -> int:
    return create_match(db, sport, "2026-10-20T20:00", "Campo Comunale").id


def add_starters(db, match_id: int, values) -> list[int]:
    """Insert STARTER signups directly, without triggering lineup regeneration."""
    ids = []
    for idx, value in enumerate(values):
        player_id = add_player(db, value, name=f"S{idx}")
        db.add(Signup(match_id=match_id, player_id=player_id, status="STARTER"))
        ids.append(player_id)
    db.commit()
    return ids


def add_signup(db, match_id: int, player_id: int, status: str, reserve_team=None) -> None:
    db.add(Signup(match_id=match_id, player_id=player_id, status=status, reserve_team=reserve_team))
    db.commit()
