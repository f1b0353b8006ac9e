import sys
from loguru import logger


def setup_logging(level="INFO", show_time=True, sink=None):
    """Configure loguru for the project.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL)
    show_time : bool
        Whether to show timestamps in the output.
    sink : file-like or path, optional
        Destination of the log records (stderr by default).
    """
    # Remove default handler
    logger.remove()

    log_format = (
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    if show_time:
        log_format = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | " + log_format

    target = sys.stderr if sink is None else sink
    logger.add(target, format=log_format, level=level, colorize=target is sys.stderr)

    return logger


# Default setup
setup_logging()
