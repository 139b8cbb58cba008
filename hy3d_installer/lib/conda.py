from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping, Sequence

from .command import require_tool, run_cmd

logger = logging.getLogger(__name__)


CONDA_HINT = "Please ensure Anaconda or Miniconda is installed and configured."


def require_conda() -> str:
    return require_tool("conda", hint=CONDA_HINT)


def list_env_names(*, dry_run: bool = False) -> list[str]:
    """Return the names of the environments conda knows about.

    The base environment (the root prefix) is reported as ``base``.
    """

    r = run_cmd(["conda", "env", "list", "--json"], dry_run=dry_run)
    if dry_run and not r.stdout:
        # Nothing was listed; plan as if every environment were absent.
        return []

    try:
        data = json.loads(r.stdout or "{}")
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Unable to parse `conda env list --json` output: {e}") from e

    envs = data.get("envs") or []
    root_prefix = data.get("root_prefix")
    names: list[str] = []
    for prefix in envs:
        if root_prefix and Path(prefix) == Path(root_prefix):
            names.append("base")
        else:
            names.append(Path(prefix).name)
    return names


def env_exists(name: str, *, dry_run: bool = False) -> bool:
    return name in list_env_names(dry_run=dry_run)


def create_env(
    name: str,
    python_version: str,
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    run_cmd(
        ["conda", "create", "-n", name, f"python={python_version}", "-y"],
        env=env,
        stream=True,
        dry_run=dry_run,
    )


def conda_run_argv(env_name: str, argv: Sequence[str]) -> list[str]:
    """Wrap ``argv`` so it executes inside the named environment."""

    return ["conda", "run", "--no-capture-output", "-n", env_name, *argv]
