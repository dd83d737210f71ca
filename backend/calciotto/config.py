import os

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
ROOT_DIR = os.path.dirname(BASE_DIR)


def _load_env() -> None:
    # backend/.env wins over the repository root one; real env vars win over both
    for path in (os.path.join(BASE_DIR, ".env"), os.path.join(ROOT_DIR, ".env")):
        if not os.path.exists(path):
            continue
        with open(path, "r", encoding="utf-8") as handle:
            for raw in handle:
                line = raw.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


_load_env()


class Config:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "calciotto.db"))
    SQLALCHEMY_ECHO = os.getenv("SQLALCHEMY_ECHO", "0") == "1"
    AUTO_SEED = os.getenv("AUTO_SEED", "1") == "1"
    SEED_PLAYER_COUNT = int(os.getenv("SEED_PLAYER_COUNT", "22"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    TEAM_NAME_LIGHT = os.getenv("TEAM_NAME_LIGHT", "Chiari")
    TEAM_NAME_DARK = os.getenv("TEAM_NAME_DARK", "Scuri")
    DEFAULT_RATING = int(os.getenv("DEFAULT_RATING", "3"))
