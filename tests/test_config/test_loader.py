import json
from pathlib import Path

import pytest

from dcm.config.loader import (
    apply_env_overrides,
    build_config_from_raw,
    load_config,
    load_config_from_file,
    load_raw_config,
)
from dcm.config.models import DCMConfig


def test_load_raw_config_yaml_and_json(tmp_path: Path) -> None:
    yaml_file = tmp_path / "config.yaml"
    yaml_file.write_text("default_role: p2pool\nlog_level: debug\n", encoding="utf-8")
    json_file = tmp_path / "config.json"
    json_file.write_text(json.dumps({"start_dir": "/srv"}), encoding="utf-8")

    assert load_raw_config(yaml_file) == {"default_role": "p2pool", "log_level": "debug"}
    assert load_raw_config(json_file) == {"start_dir": "/srv"}


def test_load_raw_config_empty_files(tmp_path: Path) -> None:
    (tmp_path / "a.yml").write_text("", encoding="utf-8")
    (tmp_path / "b.json").write_text("  ", encoding="utf-8")

    assert load_raw_config(tmp_path / "a.yml") == {}
    assert load_raw_config(tmp_path / "b.json") == {}


def test_load_raw_config_rejects_bad_input(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_raw_config(tmp_path / "missing.yaml")

    toml_file = tmp_path / "config.toml"
    toml_file.write_text("x = 1", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported settings format"):
        load_raw_config(toml_file)

    list_file = tmp_path / "config.yaml"
    list_file.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_raw_config(list_file)


def test_apply_env_overrides() -> None:
    raw = {"default_role": "bitcoin", "log_level": "INFO"}
    env = {"DCM_DEFAULT_ROLE": "p2pool", "DCM_BITCOIN_CONF": "/etc/bitcoin.conf", "DCM_LOG_LEVEL": ""}

    merged = apply_env_overrides(raw, env)

    assert merged == {"default_role": "p2pool", "log_level": "INFO", "bitcoin_conf": "/etc/bitcoin.conf"}
    assert raw["default_role"] == "bitcoin"


def test_build_config_normalises_values(tmp_path: Path) -> None:
    config = build_config_from_raw(
        {
            "start_dir": str(tmp_path),
            "default_role": " P2Pool ",
            "p2pool_conf": "~/p2pool.conf",
            "log_level": "warning",
            "log_file": "",
        }
    )

    assert config.start_dir == tmp_path.resolve()
    assert config.default_role == "p2pool"
    assert config.p2pool_conf == Path("~/p2pool.conf").expanduser().resolve()
    assert config.log_level == "WARNING"
    assert config.log_file is None
    assert config.role_path_override("p2pool") == config.p2pool_conf
    assert config.role_path_override("bitcoin") is None


def test_build_config_ignores_unknown_keys(caplog) -> None:
    caplog.set_level("WARNING", logger="dcm")
    config = build_config_from_raw({"theme": "dark"})

    assert config == DCMConfig()
    assert "theme" in caplog.text


@pytest.mark.parametrize("raw", [{"default_role": "litecoin"}, {"log_level": "LOUD"}])
def test_build_config_validates(raw) -> None:
    with pytest.raises(ValueError):
        build_config_from_raw(raw)


def test_load_config_from_file_applies_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("default_role: bitcoin\n", encoding="utf-8")
    monkeypatch.setenv("DCM_DEFAULT_ROLE", "p2pool")

    config = load_config_from_file(cfg)

    assert config.default_role == "p2pool"
    assert config.config_path == cfg.resolve()


def test_load_config_defaults_without_settings_file() -> None:
    config = load_config()

    assert config.default_role == "bitcoin"
    assert config.config_path is None


def test_load_config_finds_settings_in_app_folder(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    home = tmp_path / "home"
    home.mkdir()
    (home / "config.yaml").write_text("log_level: ERROR\n", encoding="utf-8")
    monkeypatch.setenv("DCM_HOME", str(home))

    config = load_config()

    assert config.log_level == "ERROR"
    assert config.config_path == (home / "config.yaml").resolve()


def test_relative_start_dir_is_made_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "foo").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DCM_START_DIR", "foo")

    config = load_config()

    assert config.start_dir.is_absolute()
    assert config.start_dir == (tmp_path / "foo").resolve()
    assert config.start_dir.parent == tmp_path.resolve()


def test_load_raw_config_malformed_yaml_is_value_error(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("start_dir: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_raw_config(cfg)


def test_load_raw_config_malformed_json_is_value_error(tmp_path: Path) -> None:
    cfg = tmp_path / "config.json"
    cfg.write_text("{\"start_dir\": ", encoding="utf-8")

    with pytest.raises(ValueError):
        load_raw_config(cfg)
