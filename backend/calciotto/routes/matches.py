from flask import Blueprint, request

from ..db import get_db
from ..models import Match
from ..services.match import create_match, get_match, serialize_match
from ..utils import err, ok

bp = Blueprint("matches", __name__)


@bp.get("")
def list_matches():
    db = get_db()
    matches = db.query(Match).order_by(Match.created_at.desc(), Match.id.desc()).all()
    return ok({"items": [serialize_match(db, m) for m in matches]})


@bp.post("")
def create():
    data = request.get_json(silent=True) or {}
    sport = data.get("sport")
    date_time = data.get("date_time")
    location = data.get("location")
    if not all(isinstance(v, str) and v for v in (sport, date_time, location)):
        return err("invalid_payload", 400)
    db = get_db()
    match = create_match(
        db,
        sport,
        date_time,
        location,
        team_name_light=data.get("team_name_light"),
        team_name_dark=data.get("team_name_dark"),
    )
    return ok({"match": serialize_match(db, match)}, 201)


@bp.get("/<int:match_id>")
def detail(match_id: int):
    db = get_db()
    return ok({"match": serialize_match(db, get_match(db, match_id))})
