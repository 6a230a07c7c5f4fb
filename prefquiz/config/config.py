from __future__ import annotations

"""Configuration loading and validation.

Loads YAML configuration, applies defaults, and sanity-checks values,
warning and falling back to defaults on bad input.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

DEFAULT_DB_PATH = "./data/quiz.db"
DEFAULT_TIMEOUT_S = 5.0
DEFAULT_MAX_LOGIN_ATTEMPTS = 3
DEFAULT_DISTRACTORS = 3


def default_seed_file() -> Path:
    return Path(__file__).resolve().parent.parent / "resources" / "prefectures.yml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for section in ("storage", "auth", "quiz", "ui"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    storage = cfg["storage"]
    auth = cfg["auth"]
    quiz = cfg["quiz"]
    ui = cfg["ui"]

    storage.setdefault("db_path", DEFAULT_DB_PATH)
    storage.setdefault("timeout_s", DEFAULT_TIMEOUT_S)
    auth.setdefault("max_login_attempts", DEFAULT_MAX_LOGIN_ATTEMPTS)
    quiz.setdefault("distractors", DEFAULT_DISTRACTORS)
    quiz.setdefault("seed", None)
    quiz.setdefault("seed_file", "")
    ui.setdefault("show_remaining", True)

    if not storage.get("db_path"):
        print(f"WARNING: Empty storage.db_path, using '{DEFAULT_DB_PATH}'.")
        storage["db_path"] = DEFAULT_DB_PATH
    storage["db_path"] = str(storage["db_path"])

    try:
        timeout = float(storage["timeout_s"])
    except (TypeError, ValueError):
        timeout = -1.0
    if timeout <= 0:
        print(f"WARNING: Invalid storage.timeout_s '{storage['timeout_s']}', using {DEFAULT_TIMEOUT_S}.")
        timeout = DEFAULT_TIMEOUT_S
    storage["timeout_s"] = timeout

    attempts = _as_int(auth["max_login_attempts"])
    if attempts is None or attempts < 1:
        print(f"WARNING: Invalid auth.max_login_attempts '{auth['max_login_attempts']}', using {DEFAULT_MAX_LOGIN_ATTEMPTS}.")
        attempts = DEFAULT_MAX_LOGIN_ATTEMPTS
    auth["max_login_attempts"] = attempts

    distractors = _as_int(quiz["distractors"])
    if distractors is None or distractors < 0:
        print(f"WARNING: Invalid quiz.distractors '{quiz['distractors']}', using {DEFAULT_DISTRACTORS}.")
        distractors = DEFAULT_DISTRACTORS
    quiz["distractors"] = distractors

    if quiz["seed"] is not None:
        seed = _as_int(quiz["seed"])
        if seed is None:
            print(f"WARNING: Invalid quiz.seed '{quiz['seed']}', ignoring.")
        quiz["seed"] = seed

    quiz["seed_file"] = str(quiz["seed_file"] or default_seed_file())
    ui["show_remaining"] = bool(ui["show_remaining"])

    return cfg


def load_questions(path: str | Path) -> list[Dict[str, Any]]:
    """Read the seed corpus: a YAML list of {question_id, prefecture, correct_answer}."""
    data = _load_yaml(Path(path))
    rows = data.get("questions", []) if isinstance(data, dict) else data
    if not isinstance(rows, list):
        raise ValueError(f"Seed file {path} must contain a list of questions")
    return rows
