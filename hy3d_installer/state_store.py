from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    if _detect_format(p) in {"yaml", "yml"}:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(yaml.safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys and reset everything that describes a single run.

    Decisions (conda path, built modules) persist across runs; step outcomes,
    the summary, warnings, errors and the app exit code belong to the latest
    run only.
    """

    state.setdefault("version", "1.0")
    state.setdefault("execution", {})

    exe = state["execution"]
    exe["current_step"] = None
    exe.setdefault("decisions", {})
    exe["steps"] = {}
    exe["warnings"] = []
    exe["errors"] = []
    exe.pop("summary", None)
    exe.pop("app_exit_code", None)

    return state


def record_step(state: Dict[str, Any], step_id: str, outcome: str) -> None:
    """Record what a step did on this run: created, skipped or ran."""

    steps = state.setdefault("execution", {}).setdefault("steps", {})
    steps[step_id] = outcome


def add_warning(state: Dict[str, Any], warning: Dict[str, Any]) -> None:
    state.setdefault("execution", {}).setdefault("warnings", []).append(warning)
