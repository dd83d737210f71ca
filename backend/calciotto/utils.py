from datetime import datetime, timezone

from flask import jsonify


def ok(payload: dict | None = None, status: int = 200):
    data = payload or {}
    return jsonify({"ok": True, **data}), status


def err(message: str, status: int = 400, payload: dict | None = None):
    data = payload or {}
    return jsonify({"ok": False, "error": message, **data}), status


def now_utc() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)
