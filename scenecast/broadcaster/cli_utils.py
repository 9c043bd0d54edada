import argparse
import logging
import logging.handlers

from scenecast import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_MAX_BYTES = 64 * 1024 * 1024
LOG_FILE_BACKUPS = 8


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {name}")
    return level


def init_logging(args):
    """
    Route the records of the application to stderr, and to a rotating file when --log-file is given.
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT)
    handlers = [logging.StreamHandler()]
    if args.log_file:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                args.log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
            )
        )

    root = logging.getLogger()
    root.setLevel(_log_level(args.log_level))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if args.log_file:
        root.info("Logging to file %s", args.log_file)


def add_logging_cli_args(parser: argparse.ArgumentParser):
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR.")
    parser.add_argument("--log-file", help="Also log to this file, rotated every 64 MB.")


def add_connection_cli_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--endpoint",
        default=config.get_endpoint(),
        help=f"Viewer endpoint, defaults to ${config.ENDPOINT_ENV} or {config.DEFAULT_ENDPOINT}.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=config.get_timeout(),
        help=f"Send and receive timeout in milliseconds, defaults to ${config.TIMEOUT_ENV} or no timeout.",
    )
