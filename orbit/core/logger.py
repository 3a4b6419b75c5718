import logging

from orbit.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = None):
    # Appelé une seule fois par main.py, les modules font juste getLogger(__name__)
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # requests/urllib3 sont trop bavards en DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
