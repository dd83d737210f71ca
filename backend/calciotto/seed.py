from __future__ import annotations

import random

from lineup_model import AXES

from .config import Config
from .db import SessionLocal, engine
from .models import Base, Player, PlayerRatings
from .services.player import normalize_phone


NAMES = [
    "Luca", "Marco", "Giulia", "Sara", "Paolo", "Francesco", "Chiara", "Marta",
    "Davide", "Alessia", "Stefano", "Giorgia", "Simone", "Alberto", "Elisa",
    "Carlo", "Anna", "Matteo", "Ilaria", "Gabriele", "Enrico", "Silvia",
]

SURNAMES = [
    "Rossi", "Bianchi", "Verdi", "Ferrari", "Romano", "Colombo", "Ricci", "Marino",
    "Greco", "Bruno", "Gallo", "Conti", "De Luca", "Mancini", "Costa", "Giordano",
    "Rizzo", "Lombardi", "Moretti", "Barbieri", "Fontana", "Santoro",
]


def ensure_schema() -> None:
    Base.metadata.create_all(engine)


def _placeholder_phone(idx: int) -> str:
    return normalize_phone(f"+39333{1000000 + idx:07d}")


def seed_players(session, count: int, rng: random.Random | None = None) -> int:
    """Placeholder roster with random 1..5 ratings; existing phones are skipped."""
    rng = rng or random.Random()
    created = 0
    for idx in range(count):
        phone = _placeholder_phone(idx)
        if session.query(Player).filter_by(phone=phone).one_or_none() is not None:
            continue
        player = Player(
            name=NAMES[idx % len(NAMES)],
            surname=SURNAMES[idx % len(SURNAMES)],
            phone=phone,
            notes="placeholder",
        )
        session.add(player)
        session.flush()
        session.add(PlayerRatings(player_id=player.id, **{axis: rng.randint(1, 5) for axis in AXES}))
        created += 1
    return created


def seed(count: int | None = None) -> int:
    session = SessionLocal()
    try:
        created = seed_players(session, Config.SEED_PLAYER_COUNT if count is None else count)
        session.commit()
    finally:
        session.close()
    return created


def seed_if_empty() -> bool:
    if not Config.AUTO_SEED:
        return False
    session = SessionLocal()
    try:
        existing = session.query(Player).first()
    finally:
        session.close()
    if existing:
        return False
    return seed() > 0
