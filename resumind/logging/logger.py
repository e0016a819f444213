import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Process-wide logger for resumind. Call ``configure`` once at startup."""

    _logger: logging.Logger = logging.getLogger("resumind")
    _handler: logging.Handler | None = None

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach the single stream handler (stdout by default).

        Calling it again replaces the previous handler.
        """
        cls._logger.setLevel(log_level.upper())
        if cls._handler is not None:
            cls._logger.removeHandler(cls._handler)
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        cls._logger.addHandler(handler)
        cls._handler = handler

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
