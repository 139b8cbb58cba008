from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


class ConfigError(ValueError):
    pass


DEFAULTS: Dict[str, Any] = {
    "environment": {
        "name": "hunyuan3d_env",
        "python_version": "3.10",
    },
    "project": {
        "repo": "https://openi.pcl.ac.cn/NewestAI/Hunyuan3D-2GP.git",
        "dir": "/workspace/Hunyuan3D-2GP",
        "requirements": "requirements.txt",
    },
    "model": {
        "url": "https://hf-mirror.com/tomjackson2023/rembg/resolve/main/u2net.onnx",
        "path": "/root/.u2net/u2net.onnx",
    },
    "torch": {
        "index_url": "https://download.pytorch.org/whl/cu118",
        "packages": ["torch", "torchvision", "torchaudio"],
    },
    "native_modules": [
        "hy3dgen/texgen/custom_rasterizer",
        "hy3dgen/texgen/differentiable_renderer",
    ],
    "app": {
        "entry": "gradio_app.py",
        "args": ["--enable_t23d"],
    },
    "hf_endpoint": "https://hf-mirror.com",
}


def _merge(base: Dict[str, Any], override: Dict[str, Any], *, where: str = "") -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if key not in base:
            raise ConfigError(f"Unknown config key: {where}{key}")
        if isinstance(base[key], dict):
            if not isinstance(value, dict):
                raise ConfigError(f"Config key {where}{key} must be a mapping")
            out[key] = _merge(base[key], value, where=f"{where}{key}.")
        else:
            out[key] = value
    return out


@dataclass(frozen=True)
class InstallConfig:
    raw: Dict[str, Any]

    @property
    def env_name(self) -> str:
        return str(self.raw["environment"]["name"])

    @property
    def python_version(self) -> str:
        return str(self.raw["environment"]["python_version"])

    @property
    def project_repo(self) -> str:
        return str(self.raw["project"]["repo"])

    @property
    def project_dir(self) -> str:
        return str(Path(str(self.raw["project"]["dir"])).expanduser())

    @property
    def requirements_path(self) -> str:
        return str(Path(self.project_dir) / str(self.raw["project"]["requirements"]))

    @property
    def model_url(self) -> str:
        return str(self.raw["model"]["url"])

    @property
    def model_path(self) -> str:
        return str(Path(str(self.raw["model"]["path"])).expanduser())

    @property
    def torch_index_url(self) -> str:
        return str(self.raw["torch"]["index_url"])

    @property
    def torch_packages(self) -> List[str]:
        return [str(p) for p in (self.raw["torch"]["packages"] or [])]

    @property
    def native_modules(self) -> List[str]:
        return [str(m) for m in (self.raw["native_modules"] or [])]

    @property
    def app_entry(self) -> str:
        return str(self.raw["app"]["entry"])

    @property
    def app_args(self) -> List[str]:
        return [str(a) for a in (self.raw["app"]["args"] or [])]

    @property
    def hf_endpoint(self) -> str:
        return str(self.raw["hf_endpoint"])


def default_config() -> InstallConfig:
    return InstallConfig(raw=copy.deepcopy(DEFAULTS))


def load_install_config(path: Optional[str] = None) -> InstallConfig:
    """Load a YAML config layered over the built-in defaults."""

    if path is None:
        return default_config()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("install config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{p.name} must contain a mapping/object")

    if "native_modules" in raw and not isinstance(raw["native_modules"], list):
        raise ConfigError("Config key native_modules must be a list")

    return InstallConfig(raw=_merge(DEFAULTS, raw))
