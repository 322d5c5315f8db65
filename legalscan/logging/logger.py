import logging
import sys

_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class _KeyValueFormatter(logging.Formatter):
    """Appends fields passed through ``extra`` as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        fields = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not fields:
            return base
        pairs = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        return f"{base} | {pairs}"


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("legalscan")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _KeyValueFormatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        """Log an info message with optional structured fields."""
        cls._logger.info(message, extra=fields)

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        """Log an error message with optional structured fields."""
        cls._logger.error(message, extra=fields)

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        """Log a warning message with optional structured fields."""
        cls._logger.warning(message, extra=fields)

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        """Log a debug message with optional structured fields."""
        cls._logger.debug(message, extra=fields)
