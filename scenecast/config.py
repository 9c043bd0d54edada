"""
Connection settings, read from the environment. Command line arguments take precedence.
"""
import os
from typing import Optional

DEFAULT_ENDPOINT = "tcp://127.0.0.1:6000"

ENDPOINT_ENV = "SCENECAST_ENDPOINT"
TIMEOUT_ENV = "SCENECAST_TIMEOUT_MS"


def get_endpoint() -> str:
    return os.environ.get(ENDPOINT_ENV, DEFAULT_ENDPOINT)


def get_timeout() -> Optional[int]:
    """Send and receive timeout in milliseconds, None to block forever"""
    value = os.environ.get(TIMEOUT_ENV)
    if not value:
        return None
    try:
        timeout = int(value)
    except ValueError:
        raise ValueError(f"{TIMEOUT_ENV} env var set to {value!r}, expected an integer number of milliseconds")
    if timeout < 0:
        return None
    return timeout
