import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

DEFAULTS = {
    "ECA_DB_PATH": "data/eca.db",
    "ECA_LOG_LEVEL": "INFO",
    "ECA_LOG_DIR": "logs",
    "ECA_MIN_CONFIDENCE": "50",
}


def load_env() -> None:
    """Load .env from the working directory if present.

    Values already set in the environment win over the file.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def get_settings() -> Dict[str, Any]:
    """
    Resolve runtime settings from the environment.

    Returns:
        Dict with db_path, log_level, log_dir and min_confidence

    Raises:
        ValueError: If ECA_MIN_CONFIDENCE is not a number
    """
    raw = {key: os.getenv(key, default) for key, default in DEFAULTS.items()}
    try:
        min_confidence = float(raw["ECA_MIN_CONFIDENCE"])
    except ValueError:
        raise ValueError(f"ECA_MIN_CONFIDENCE must be a number, got {raw['ECA_MIN_CONFIDENCE']!r}")
    return {
        "db_path": Path(raw["ECA_DB_PATH"]),
        "log_level": raw["ECA_LOG_LEVEL"].upper(),
        "log_dir": Path(raw["ECA_LOG_DIR"]),
        "min_confidence": min_confidence,
    }
