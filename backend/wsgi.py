import pathlib
import sys

BACKEND = pathlib.Path(__file__).resolve().parent
for path in (BACKEND, BACKEND / "lineup_model"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from calciotto import create_app

app = create_app()
