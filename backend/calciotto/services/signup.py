import logging

from lineup_model import starters_cap

from ..exceptions import InvalidStatusError, MatchNotOpenError, SignupNotFoundError, StartersFullError
from ..models import Signup
from .lineup import refresh_lineups
from .match import get_match
from .notify import PLAYER_REGISTERED, Publisher, notify
from .player import ensure_ratings, get_player

logger = logging.getLogger(__name__)

SIGNUP_STATUSES = ("STARTER", "RESERVE", "NEXT")


def _get_signup(db, match_id: int, player_id: int) -> Signup | None:
    return db.query(Signup).filter_by(match_id=match_id, player_id=player_id).one_or_none()


def _count(db, match_id: int, exclude_player_id: int, **filters) -> int:
    return (
        db.query(Signup)
        .filter_by(match_id=match_id, **filters)
        .filter(Signup.player_id != exclude_player_id)
        .count()
    )


def _reserve_side(db, match_id: int, player_id: int) -> str:
    light = _count(db, match_id, player_id, status="RESERVE", reserve_team="LIGHT")
    dark = _count(db, match_id, player_id, status="RESERVE", reserve_team="DARK")
    return "LIGHT" if light <= dark else "DARK"


def _admitted_status(db, match, player_id: int, choice: str) -> str:
    if choice == "NEXT":
        return "NEXT"
    if choice == "STARTER" and _count(db, match.id, player_id, status="STARTER") < starters_cap(match.sport):
        return "STARTER"
    return "RESERVE"


def _store(db, match_id: int, player_id: int, status: str, existing: Signup | None) -> Signup:
    if status == "RESERVE":
        if existing is not None and existing.status == "RESERVE" and existing.reserve_team:
            reserve_team = existing.reserve_team
        else:
            reserve_team = _reserve_side(db, match_id, player_id)
    else:
        reserve_team = None

    if existing is None:
        existing = Signup(match_id=match_id, player_id=player_id, status=status, reserve_team=reserve_team)
        db.add(existing)
    else:
        existing.status = status
        existing.reserve_team = reserve_team
    db.flush()
    return existing


def _after_change(db, match_id: int, was_starter: bool, is_starter: bool, publisher: Publisher | None) -> None:
    if was_starter != is_starter:
        refresh_lineups(db, match_id, publisher=publisher)


def register_signup(
    db,
    match_id: int,
    player_id: int,
    choice: str,
    suggested_ratings: dict | None = None,
    publisher: Publisher | None = None,
) -> Signup:
    """Sign a player up, capping starters at the sport's size.

    A STARTER choice beyond the cap becomes RESERVE; reserves alternate
    between the light and dark benches. Lineups are regenerated whenever the
    starter set changes.
    """
    if choice not in SIGNUP_STATUSES:
        raise InvalidStatusError(f"invalid_status: {choice}")
    match = get_match(db, match_id, for_update=True)
    if match.status != "OPEN":
        raise MatchNotOpenError()
    player = get_player(db, player_id)
    ensure_ratings(db, player.id, suggested_ratings)

    existing = _get_signup(db, match_id, player.id)
    was_starter = existing is not None and existing.status == "STARTER"
    status = _admitted_status(db, match, player.id, choice)
    signup = _store(db, match_id, player.id, status, existing)
    db.commit()
    logger.info("match %s: player %s signed up as %s (asked %s)", match_id, player.id, status, choice)

    notify(publisher, match_id, PLAYER_REGISTERED, player_id=player.id, player_name=player.display_name, status=status)
    _after_change(db, match_id, was_starter, status == "STARTER", publisher)
    return signup


def change_signup_status(
    db,
    match_id: int,
    player_id: int,
    status: str,
    publisher: Publisher | None = None,
) -> Signup:
    if status not in SIGNUP_STATUSES:
        raise InvalidStatusError(f"invalid_status: {status}")
    match = get_match(db, match_id, for_update=True)
    signup = _get_signup(db, match_id, player_id)
    if signup is None:
        raise SignupNotFoundError(player_id=player_id)

    was_starter = signup.status == "STARTER"
    if status == "STARTER" and not was_starter:
        if _count(db, match_id, player_id, status="STARTER") >= starters_cap(match.sport):
            raise StartersFullError()
    signup = _store(db, match_id, player_id, status, signup)
    db.commit()
    logger.info("match %s: player %s moved to %s", match_id, player_id, status)
    _after_change(db, match_id, was_starter, status == "STARTER", publisher)
    return signup


def remove_signup(db, match_id: int, player_id: int, publisher: Publisher | None = None) -> None:
    get_match(db, match_id)
    signup = _get_signup(db, match_id, player_id)
    if signup is None:
        raise SignupNotFoundError(player_id=player_id)
    was_starter = signup.status == "STARTER"
    db.delete(signup)
    db.commit()
    logger.info("match %s: player %s removed", match_id, player_id)
    _after_change(db, match_id, was_starter, False, publisher)
