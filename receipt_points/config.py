import os
from dataclasses import dataclass

from dotenv import load_dotenv

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True)
class Settings:
    host: str = "localhost"
    port: int = 8080
    log_level: str = "info"


def load_settings() -> Settings:
    """Read settings from the environment, after loading any ``.env`` file."""
    load_dotenv()

    host = os.environ.get("RECEIPT_POINTS_HOST", Settings.host)

    raw_port = os.environ.get("RECEIPT_POINTS_PORT", str(Settings.port))
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"RECEIPT_POINTS_PORT must be an integer, got {raw_port!r}")
    if not 0 < port < 65536:
        raise ValueError(f"RECEIPT_POINTS_PORT out of range: {port}")

    log_level = os.environ.get("RECEIPT_POINTS_LOG_LEVEL", Settings.log_level).lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"RECEIPT_POINTS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    return Settings(host=host, port=port, log_level=log_level)
