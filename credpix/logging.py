import logging
import sys

from credpix.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Third-party loggers that are chatty at DEBUG.
QUIET_LOGGERS = ("uvicorn.access", "PIL")


def configure_logging() -> None:
    """Send credpix, web and uvicorn logs to stderr as text or JSON.

    The web app calls this at import and again from its lifespan, since uvicorn
    installs its own handlers on startup. The CLI calls it once in ``main``.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Routes log each PIX request themselves; Pillow logs every PNG chunk it writes.
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


reconfigure = configure_logging
