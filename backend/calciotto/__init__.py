from flask import Flask
from flask_cors import CORS

from .config import Config
from .db import SessionLocal
from .exceptions import CalciottoError
from .logger import setup_logging
from .seed import ensure_schema, seed_if_empty
from .services.notify import Publisher
from .utils import err


def create_app(publisher: Publisher | None = None) -> Flask:
    setup_logging(Config.LOG_LEVEL)
    app = Flask(__name__)
    app.url_map.strict_slashes = False
    app.extensions["calciotto.publisher"] = publisher or Publisher()
    CORS(
        app,
        resources={r"/api/*": {"origins": Config.CORS_ORIGINS}},
        allow_headers=["Content-Type", "Authorization"],
    )

    from .routes import lineups, matches, players, signups

    api_prefix = "/api"
    app.register_blueprint(players.bp, url_prefix=f"{api_prefix}/players")
    app.register_blueprint(matches.bp, url_prefix=f"{api_prefix}/matches")
    app.register_blueprint(signups.bp, url_prefix=f"{api_prefix}/matches/<int:match_id>/signups")
    app.register_blueprint(lineups.bp, url_prefix=api_prefix)

    @app.get("/api/health")
    def healthcheck():
        return {"ok": True}

    @app.teardown_appcontext
    def shutdown_session(_exc=None):
        SessionLocal.remove()

    @app.errorhandler(CalciottoError)
    def handle_calciotto_error(exc: CalciottoError):
        payload = {"player_id": exc.player_id} if exc.player_id is not None else None
        return err(exc.code, exc.status, payload)

    ensure_schema()
    seed_if_empty()

    return app
