import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a single stream handler to the ``taskify`` logger.

    Safe to call more than once (e.g. app reloads): the handler is only added
    the first time.
    """
    logger = logging.getLogger("taskify")
    logger.setLevel(level.upper())

    if any(getattr(h, "_taskify_handler", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._taskify_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    # Third-party loggers stay quiet unless something is wrong
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
