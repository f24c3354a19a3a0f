import logging, os, sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
LOG_LEVEL_ENV = "DECTEST_LOG_LEVEL"

def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    # DECTEST_LOG_LEVEL wins over the -v flag
    default_level = "DEBUG" if verbose else "INFO"
    log_level = os.getenv(LOG_LEVEL_ENV, default_level).upper()
    root.setLevel(getattr(logging, log_level, logging.INFO))
    root.handlers = [handler]
