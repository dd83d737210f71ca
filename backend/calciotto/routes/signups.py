from flask import Blueprint, current_app, request

from ..db import get_db
from ..services.player import get_or_create_player
from ..services.signup import change_signup_status, register_signup, remove_signup
from ..utils import err, ok

bp = Blueprint("signups", __name__)


def _publisher():
    return current_app.extensions.get("calciotto.publisher")


def _signup_payload(signup) -> dict:
    return {"player_id": signup.player_id, "status": signup.status, "reserve_team": signup.reserve_team}


@bp.post("")
def create(match_id: int):
    data = request.get_json(silent=True) or {}
    choice = data.get("choice")
    ratings = data.get("suggested_ratings")
    if not isinstance(choice, str) or (ratings is not None and not isinstance(ratings, dict)):
        return err("invalid_payload", 400)
    db = get_db()
    player_id = data.get("player_id")
    if player_id is None:
        phone = data.get("phone")
        if not isinstance(phone, str) or not phone.strip():
            return err("invalid_payload", 400)
        if any(data.get(field) is not None and not isinstance(data.get(field), str) for field in ("name", "surname")):
            return err("invalid_payload", 400)
        player_id = get_or_create_player(db, phone, data.get("name") or "", data.get("surname") or "").id
    elif not isinstance(player_id, int) or isinstance(player_id, bool):
        return err("invalid_payload", 400)
    signup = register_signup(
        db,
        match_id,
        player_id,
        choice,
        suggested_ratings=ratings,
        publisher=_publisher(),
    )
    return ok({"signup": _signup_payload(signup)}, 201)


@bp.patch("/<int:player_id>")
def update(match_id: int, player_id: int):
    data = request.get_json(silent=True) or {}
    status = data.get("status")
    if not isinstance(status, str):
        return err("invalid_payload", 400)
    db = get_db()
    signup = change_signup_status(db, match_id, player_id, status, publisher=_publisher())
    return ok({"signup": _signup_payload(signup)})


@bp.delete("/<int:player_id>")
def delete(match_id: int, player_id: int):
    db = get_db()
    remove_signup(db, match_id, player_id, publisher=_publisher())
    return ok()
