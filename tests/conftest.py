from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import yaml

ENV_PREFIX = "/opt/conda"

NATIVE_MODULES = [
    "hy3dgen/texgen/custom_rasterizer",
    "hy3dgen/texgen/differentiable_renderer",
]


class FakeSystem:
    """Stands in for conda, git, wget/curl, pip and the launched app.

    Every call is recorded in ``calls``; argv matching ``fail_on`` exits 1.
    """

    def __init__(self) -> None:
        self.tools = {"conda", "git", "wget", "curl"}
        self.envs: List[str] = []
        self.repo_files: List[str] = ["requirements.txt", "gradio_app.py"]
        self.repo_dirs: List[str] = list(NATIVE_MODULES)
        self.fail_on: Optional[str] = None
        self.app_returncode = 0
        self.calls: List[Dict[str, Any]] = []

    def which(self, tool: str) -> Optional[str]:
        return f"/usr/bin/{tool}" if tool in self.tools else None

    def commands(self) -> List[str]:
        return [" ".join(c["argv"]) for c in self.calls]

    def count(self, fragment: str) -> int:
        return sum(1 for cmd in self.commands() if fragment in cmd)

    def run(self, argv, **kwargs) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.calls.append({"argv": argv, "cwd": kwargs.get("cwd"), "env": kwargs.get("env") or {}})

        if self.fail_on and self.fail_on in " ".join(argv):
            return subprocess.CompletedProcess(argv, 1, "", "simulated failure")

        stdout = ""
        returncode = 0
        if argv[:4] == ["conda", "env", "list", "--json"]:
            envs = [ENV_PREFIX] + [f"{ENV_PREFIX}/envs/{n}" for n in self.envs]
            stdout = json.dumps({"envs": envs, "root_prefix": ENV_PREFIX})
        elif argv[:2] == ["conda", "create"]:
            self.envs.append(argv[argv.index("-n") + 1])
        elif argv[:2] == ["git", "clone"]:
            dest = Path(argv[3])
            dest.mkdir(parents=True)
            for rel in self.repo_files:
                (dest / rel).write_text("", encoding="utf-8")
            for rel in self.repo_dirs:
                (dest / rel).mkdir(parents=True)
        elif argv[0] == "wget":
            Path(argv[argv.index("-O") + 1]).write_bytes(b"onnx")
        elif argv[0] == "curl":
            Path(argv[argv.index("-o") + 1]).write_bytes(b"onnx")
        elif argv[:2] == ["conda", "run"] and "gradio_app.py" in argv:
            returncode = self.app_returncode

        return subprocess.CompletedProcess(argv, returncode, stdout, "")


@pytest.fixture
def fake(monkeypatch) -> FakeSystem:
    system = FakeSystem()
    monkeypatch.setattr("hy3d_installer.lib.command.subprocess.run", system.run)
    monkeypatch.setattr("hy3d_installer.lib.command.shutil.which", system.which)
    return system


@pytest.fixture
def workspace(tmp_path) -> Dict[str, Path]:
    return {
        "project_dir": tmp_path / "workspace" / "Hunyuan3D-2GP",
        "model_path": tmp_path / "u2net" / "u2net.onnx",
        "state": tmp_path / "state.json",
        "log": tmp_path / "installer.log",
        "config": tmp_path / "config.yaml",
    }


@pytest.fixture
def config_file(workspace) -> Path:
    workspace["config"].write_text(
        yaml.safe_dump(
            {
                "project": {"dir": str(workspace["project_dir"])},
                "model": {"path": str(workspace["model_path"])},
            }
        ),
        encoding="utf-8",
    )
    return workspace["config"]


@pytest.fixture
def cli_args(workspace, config_file) -> List[str]:
    return [
        "--config",
        str(config_file),
        "--state",
        str(workspace["state"]),
        "--log",
        str(workspace["log"]),
    ]


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root = logging.getLogger()
    # Exact types only: pytest's own capture handlers subclass these.
    for h in list(root.handlers):
        if type(h) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(h)
            h.close()
    if hasattr(root, "_hy3d_log_path"):
        delattr(root, "_hy3d_log_path")
    root.setLevel(logging.WARNING)
