from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .command import run_cmd
from .conda import conda_run_argv

logger = logging.getLogger(__name__)


def pip_install(
    env_name: str,
    packages: Sequence[str],
    *,
    index_url: str | None = None,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    argv = ["python", "-m", "pip", "install", *packages]
    if index_url:
        argv += ["--index-url", index_url]
    run_cmd(conda_run_argv(env_name, argv), env=env, stream=True, dry_run=dry_run)


def pip_install_requirements(
    env_name: str,
    requirements: str,
    *,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    run_cmd(
        conda_run_argv(env_name, ["python", "-m", "pip", "install", "-r", requirements]),
        env=env,
        cwd=cwd,
        stream=True,
        dry_run=dry_run,
    )


def setup_py_install(
    env_name: str,
    module_dir: str,
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    """Build and install a native extension from its source directory."""

    run_cmd(
        conda_run_argv(env_name, ["python", "setup.py", "install"]),
        env=env,
        cwd=module_dir,
        stream=True,
        dry_run=dry_run,
    )
