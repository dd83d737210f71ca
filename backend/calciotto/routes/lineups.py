from flask import Blueprint, current_app, request

from ..db import get_db
from ..services.lineup import (
    apply_variant,
    evaluate_manual_split,
    list_variants,
    refresh_lineups,
    save_manual_variant,
)
from ..utils import err, ok

bp = Blueprint("lineups", __name__)


def _publisher():
    return current_app.extensions.get("calciotto.publisher")


def _split_payload(data: dict) -> tuple[list, list] | None:
    light = data.get("light")
    dark = data.get("dark")
    if not isinstance(light, list) or not isinstance(dark, list):
        return None
    return light, dark


@bp.get("/matches/<int:match_id>/lineups")
def variants(match_id: int):
    db = get_db()
    return ok({"variants": list_variants(db, match_id)})


@bp.post("/matches/<int:match_id>/lineups/generate")
def generate(match_id: int):
    db = get_db()
    variant_ids = refresh_lineups(db, match_id, publisher=_publisher(), clear_if_empty=False)
    return ok({"variant_ids": variant_ids, "variants": list_variants(db, match_id)})


@bp.post("/matches/<int:match_id>/lineups/manual")
def manual(match_id: int):
    data = request.get_json(silent=True) or {}
    split = _split_payload(data)
    if split is None:
        return err("invalid_payload", 400)
    db = get_db()
    saved = save_manual_variant(db, match_id, *split)
    if data.get("apply", True):
        apply_variant(db, saved["variant_id"])
    return ok(saved)


@bp.post("/matches/<int:match_id>/lineups/evaluate")
def evaluate(match_id: int):
    data = request.get_json(silent=True) or {}
    split = _split_payload(data)
    if split is None:
        return err("invalid_payload", 400)
    top_n = data.get("top_n", 3)
    if not isinstance(top_n, int) or isinstance(top_n, bool) or top_n < 0:
        return err("invalid_payload", 400)
    db = get_db()
    return ok({"evaluation": evaluate_manual_split(db, match_id, *split, top_n=top_n)})


@bp.post("/lineups/<int:variant_id>/apply")
def apply(variant_id: int):
    db = get_db()
    apply_variant(db, variant_id)
    return ok()
