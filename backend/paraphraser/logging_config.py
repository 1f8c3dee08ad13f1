import logging

from paraphraser.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    root = logging.getLogger()
    if root.handlers:
        # uvicorn / pytest already installed handlers
        root.setLevel(level.upper())
        return

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
