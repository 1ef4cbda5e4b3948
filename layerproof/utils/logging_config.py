import logging
from pathlib import Path
from typing import Optional

# Client libraries that log every HTTP round trip at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure root logging for the relay and its scripts.

    ``level`` is a level name; unknown names fall back to INFO. Below DEBUG
    the HTTP client libraries are held at WARNING so per-request traffic
    does not drown out group progress. Output goes to ``log_file`` when
    given, otherwise to stderr.
    """

    logging_level = getattr(logging, level.upper(), logging.INFO)
    log_kwargs = {
        "level": logging_level,
        "format": "[%(levelname)s] %(name)s - %(message)s",
    }

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        log_kwargs["filename"] = log_file

    logging.basicConfig(**log_kwargs)

    if logging_level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
