import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def _formatter() -> logging.Formatter:
    return logging.Formatter(fmt=FMT, datefmt=DATEFMT)


def setup_logging():
    """
    - Console + rotating file (<LOG_DIR>/app.log, default logs/app.log)
    - LOG_LEVEL / LOG_DIR come from env
    - Called once at import of app.main; later calls only adjust the level
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_path = Path(os.getenv("LOG_DIR", "logs"))

    root = logging.getLogger()
    root.setLevel(level)

    # Prevent duplicate handlers
    if root.handlers:
        return

    log_path.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(_formatter())

    # 5MB x 5
    file_handler = RotatingFileHandler(
        log_path / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(_formatter())

    root.addHandler(console)
    root.addHandler(file_handler)

    # openpyxl 寫檔時的 warning 太吵
    logging.getLogger("openpyxl").setLevel(logging.ERROR)
