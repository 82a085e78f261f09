"""
Paths, logging setup, config load/save, option validation, safe_print.
"""

import os
import json
import sys
import logging
from dataclasses import dataclass
from pathlib import Path


# ─── Paths ───────────────────────────────────────────────────────
# One config/log per user. Override with ACKEE_TRACKER_HOME.
_FOLDER_NAME = ".ackee-tracker"

BASE_DIR = Path(os.environ.get("ACKEE_TRACKER_HOME", Path.home() / _FOLDER_NAME))

CONFIG_FILE = BASE_DIR / "config.json"
LOG_FILE = BASE_DIR / "tracker.log"

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
_LOG_MAX_BYTES = 1_000_000


# ─── Safe print (no crash without a console) ─────────────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

log = logging.getLogger("tracker")


def setup_logging(log_file=LOG_FILE, level=logging.INFO):
    """Attach a file handler (truncated past ~1 MB) and a stdout handler."""
    log.setLevel(level)
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            if log_file.exists() and log_file.stat().st_size > _LOG_MAX_BYTES:
                log_file.write_text("")
        except OSError:
            pass
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)
    return log


# ─── Config Management ──────────────────────────────────────────

def load_config(path=CONFIG_FILE):
    """Load config from disk. Returns dict or None."""
    path = Path(path)
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return None
    return None


def save_config(config, path=CONFIG_FILE):
    """Save config dict to disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
    log.info("Config saved to %s", path)


# ─── Tracker options ─────────────────────────────────────────────

@dataclass(frozen=True)
class Options:
    detailed: bool = False
    ignore_localhost: bool = True


def validate_options(opts=None) -> Options:
    """
    Build Options from a raw dict, applying defaults.

    Only a literal True turns `detailed` on and only a literal False turns
    `ignoreLocalhost` off; anything else falls back to the default.
    """
    if isinstance(opts, Options):
        return opts
    if not isinstance(opts, dict):
        opts = {}
    ignore = opts.get("ignoreLocalhost", opts.get("ignore_localhost"))
    return Options(
        detailed=opts.get("detailed") is True,
        ignore_localhost=ignore is not False,
    )
