import sys
import logging
import structlog
from ..util.terminal_color import TerminalColorMarks

LOGGER_NAME = "restserial"

TEXT_LOG_FORMAT = (
    f"{TerminalColorMarks.BOLD}{TerminalColorMarks.BLUE}%(name)s |{TerminalColorMarks.END}"
    " %(asctime)s - %(levelname)s - %(message)s"
)


def _json_formatter() -> logging.Formatter:
    # stdlib records from this package are rendered by structlog, stamped
    # with the call site so a failed decode points back at the caller
    pre_chain = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            [
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def _build_handler(format: str) -> logging.Handler:
    if format == "json":
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_json_formatter())
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT))
    return handler


def get_logger(format: str = "text", level: str = "INFO") -> logging.Logger:
    """
    Configure and return the ``restserial`` logger.

    ``format`` is ``"text"`` (colored, stderr) or ``"json"`` (structlog, stdout).
    Calling it again replaces the previous handler instead of adding another.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(_build_handler(format))
    logger.setLevel(level.upper())
    return logger
