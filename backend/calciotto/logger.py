"""
Logging setup for the calciotto backend.

Call setup_logging() once from create_app(). Modules log through
``logging.getLogger(__name__)``, which keeps them under the "calciotto"
namespace so LOG_LEVEL controls the app without unmuting SQLAlchemy or
werkzeug.
"""

import logging
import sys

APP_LOGGER_NAME = "calciotto"


def setup_logging(app_level: int | str = logging.INFO) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        root_logger.addHandler(handler)

    logging.getLogger(APP_LOGGER_NAME).setLevel(app_level)
