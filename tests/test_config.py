from __future__ import annotations

import pytest
import yaml

from hy3d_installer.config import ConfigError, default_config, load_install_config


def test_defaults_describe_the_hunyuan_install():
    cfg = default_config()
    assert cfg.env_name == "hunyuan3d_env"
    assert cfg.python_version == "3.10"
    assert cfg.project_dir == "/workspace/Hunyuan3D-2GP"
    assert cfg.requirements_path == "/workspace/Hunyuan3D-2GP/requirements.txt"
    assert cfg.model_path == "/root/.u2net/u2net.onnx"
    assert cfg.torch_packages == ["torch", "torchvision", "torchaudio"]
    assert cfg.native_modules == [
        "hy3dgen/texgen/custom_rasterizer",
        "hy3dgen/texgen/differentiable_renderer",
    ]
    assert cfg.app_entry == "gradio_app.py"
    assert cfg.app_args == ["--enable_t23d"]
    assert cfg.hf_endpoint == "https://hf-mirror.com"


def test_no_path_means_defaults():
    assert load_install_config(None).raw == default_config().raw


def test_yaml_overrides_merge_with_defaults(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text(
        yaml.safe_dump({"environment": {"name": "other_env"}, "app": {"args": []}}),
        encoding="utf-8",
    )

    cfg = load_install_config(str(p))
    assert cfg.env_name == "other_env"
    assert cfg.python_version == "3.10"
    assert cfg.app_args == []
    assert cfg.app_entry == "gradio_app.py"


def test_empty_yaml_is_defaults(tmp_path):
    p = tmp_path / "cfg.yml"
    p.write_text("", encoding="utf-8")
    assert load_install_config(str(p)).raw == default_config().raw


@pytest.mark.parametrize(
    "content",
    [
        {"colour": "blue"},
        {"project": {"branch": "main"}},
        {"project": "elsewhere"},
        {"native_modules": "hy3dgen/texgen/custom_rasterizer"},
    ],
)
def test_invalid_overrides_are_rejected(tmp_path, content):
    p = tmp_path / "cfg.yaml"
    p.write_text(yaml.safe_dump(content), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_install_config(str(p))


def test_non_mapping_and_wrong_suffix(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_install_config(str(p))

    j = tmp_path / "cfg.json"
    j.write_text("{}", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_install_config(str(j))

    with pytest.raises(FileNotFoundError):
        load_install_config(str(tmp_path / "missing.yaml"))
