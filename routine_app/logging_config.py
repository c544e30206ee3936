import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logging(log_dir: str = None):
    """
    Console + rotating file (<LOG_DIR>/routine.log) for the routine_app.* loggers:
    routine_app (HTTP access), routine_app.routine (saves, deletes, conflicts),
    routine_app.auth (logins, admin seeding).
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = log_dir or os.getenv("LOG_DIR", "logs")

    root = logging.getLogger()
    root.setLevel(level)

    # uvicorn --reload and the test client both import main more than once
    if root.handlers:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        path / "routine.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # passlib warns about the bcrypt version on every hash
    logging.getLogger("passlib").setLevel(logging.ERROR)
