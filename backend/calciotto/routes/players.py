from flask import Blueprint, request

from ..db import get_db
from ..models import Player, PlayerRatings
from ..services.player import ensure_ratings, get_or_create_player, get_player, serialize_player, update_ratings
from ..utils import err, ok

bp = Blueprint("players", __name__)


@bp.get("")
def list_players():
    db = get_db()
    players = db.query(Player).order_by(Player.surname.asc(), Player.name.asc(), Player.id.asc()).all()
    ratings = {r.player_id: r for r in db.query(PlayerRatings).all()}
    return ok({"items": [serialize_player(p, ratings.get(p.id)) for p in players]})


@bp.post("")
def create():
    data = request.get_json(silent=True) or {}
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        return err("invalid_payload", 400)
    ratings = data.get("ratings")
    if ratings is not None and not isinstance(ratings, dict):
        return err("invalid_payload", 400)
    for field in ("phone", "surname"):
        if data.get(field) is not None and not isinstance(data.get(field), str):
            return err("invalid_payload", 400)
    db = get_db()
    player = get_or_create_player(db, data.get("phone"), name.strip(), (data.get("surname") or "").strip())
    row = ensure_ratings(db, player.id, ratings)
    db.commit()
    return ok({"player": serialize_player(player, row)}, 201)


@bp.put("/<int:player_id>/ratings")
def set_ratings(player_id: int):
    data = request.get_json(silent=True) or {}
    if not isinstance(data.get("ratings"), dict):
        return err("invalid_payload", 400)
    db = get_db()
    row = update_ratings(db, player_id, data["ratings"])
    return ok({"player": serialize_player(get_player(db, player_id), row)})
