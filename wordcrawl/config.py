import os
import logging
from pathlib import Path
from typing import Optional

try:
    from dotenv import load_dotenv
except ImportError:
    logging.warning("python-dotenv not available; using environment variables only")
else:
    loaded = load_dotenv()
    if not loaded and Path(".env").exists():
        raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw


def get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logging.exception("Invalid %s: %r", name, raw)
        return default


def get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logging.exception("Invalid %s: %r", name, raw)
        return default


def get_optional_float_env(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except ValueError:
        logging.exception("Invalid %s: %r", name, raw)
        return None


def log_level(verbose: bool = False) -> str:
    default = "INFO" if verbose else "WARNING"
    return get_str_env("LOG_LEVEL", default).strip().upper()
