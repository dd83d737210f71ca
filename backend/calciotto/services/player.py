import logging
import re

from lineup_model import AXES, RatedPlayer

from ..config import Config
from ..exceptions import InvalidRatingsError, PlayerNotFoundError
from ..models import Player, PlayerRatings
from ..utils import now_utc

logger = logging.getLogger(__name__)


def normalize_phone(phone: str) -> str:
    digits = re.sub(r"[^\d+]", "", phone or "")
    if digits.startswith("00"):
        return "+" + digits[2:]
    if digits.startswith("+"):
        return digits
    if digits.startswith("0"):
        return "+39" + digits[1:]
    return "+39" + digits


def get_player(db, player_id: int) -> Player:
    player = db.query(Player).filter_by(id=player_id).one_or_none()
    if player is None:
        raise PlayerNotFoundError(player_id=player_id)
    return player


def get_or_create_player(db, phone: str | None = None, name: str = "", surname: str = "") -> Player:
    normalized = normalize_phone(phone) if phone else None
    player = db.query(Player).filter_by(phone=normalized).one_or_none() if normalized else None
    if player is None:
        player = Player(name=name or "", surname=surname or "", phone=normalized)
        db.add(player)
        db.flush()
        logger.info("player %s created", player.id)
    else:
        if name and not player.name:
            player.name = name
        if surname and not player.surname:
            player.surname = surname
    return player


def _validated_ratings(player_id: int, ratings: dict) -> dict[str, int]:
    try:
        rated = RatedPlayer.from_ratings(str(player_id), ratings)
    except (TypeError, ValueError) as exc:
        raise InvalidRatingsError(f"invalid_ratings: {exc}", player_id=player_id) from exc
    return rated.ratings


def ensure_ratings(db, player_id: int, suggested: dict | None = None) -> PlayerRatings:
    """Back-fill ratings for a player who has none; existing ratings are kept."""
    row = db.query(PlayerRatings).filter_by(player_id=player_id).one_or_none()
    if row is not None:
        return row
    values = suggested or {axis: Config.DEFAULT_RATING for axis in AXES}
    row = PlayerRatings(player_id=player_id, **_validated_ratings(player_id, values))
    db.add(row)
    db.flush()
    return row


def update_ratings(db, player_id: int, ratings: dict) -> PlayerRatings:
    get_player(db, player_id)
    values = _validated_ratings(player_id, ratings)
    row = db.query(PlayerRatings).filter_by(player_id=player_id).one_or_none()
    if row is None:
        row = PlayerRatings(player_id=player_id)
        db.add(row)
    for axis, value in values.items():
        setattr(row, axis, value)
    row.updated_at = now_utc()
    db.commit()
    return row


def serialize_player(player: Player, ratings: PlayerRatings | None) -> dict:
    return {
        "id": player.id,
        "name": player.display_name,
        "phone": player.phone,
        "ratings": {axis: getattr(ratings, axis) for axis in AXES} if ratings else None,
    }
