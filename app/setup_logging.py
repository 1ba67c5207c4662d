import logging, sys

from app.settings import LOG_LEVEL


def setup_logging(level: str | None = None):
    """Attach a single stdout handler to the root logger."""
    logger = logging.getLogger()
    if logger.handlers:  # uvicorn --reload imports us twice
        return
    level = level or LOG_LEVEL
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s :: %(message)s"))
    logger.addHandler(h)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
