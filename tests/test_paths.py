from __future__ import annotations

from pathlib import Path

import pytest

from dcm.paths import (
    find_settings_file,
    get_app_folder,
    get_bitcoin_conf_path,
    get_p2pool_conf_path,
)


def test_get_app_folder_override(tmp_path: Path) -> None:
    target = tmp_path / "dcm_home"
    assert get_app_folder(target) == target.resolve()


def test_get_app_folder_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DCM_HOME", str(tmp_path / "from_env"))
    assert get_app_folder() == (tmp_path / "from_env").resolve()


def test_find_settings_file_prefers_yaml(tmp_path: Path) -> None:
    assert find_settings_file(tmp_path) is None

    (tmp_path / "config.json").write_text("{}", encoding="utf-8")
    assert find_settings_file(tmp_path) == tmp_path.resolve() / "config.json"

    (tmp_path / "config.yaml").write_text("{}", encoding="utf-8")
    assert find_settings_file(tmp_path) == tmp_path.resolve() / "config.yaml"


@pytest.mark.parametrize(
    ("platform", "env", "expected"),
    [
        ("linux", {"HOME": "/home/u"}, Path("/home/u/.bitcoin/bitcoin.conf")),
        ("darwin", {"HOME": "/Users/u"}, Path("/Users/u/Library/Application Support/Bitcoin/bitcoin.conf")),
        ("win32", {"APPDATA": "C:/Users/u/AppData/Roaming"}, Path("C:/Users/u/AppData/Roaming/Bitcoin/bitcoin.conf")),
        ("linux", {}, None),
        ("win32", {}, None),
        ("sunos5", {"HOME": "/home/u"}, None),
    ],
)
def test_bitcoin_conf_path(platform: str, env: dict[str, str], expected) -> None:
    assert get_bitcoin_conf_path(platform=platform, env=env) == expected


@pytest.mark.parametrize(
    ("platform", "env", "expected"),
    [
        ("linux", {"HOME": "/home/u"}, Path("/home/u/.p2pool/p2pool.conf")),
        ("darwin", {"HOME": "/Users/u"}, Path("/Users/u/.p2pool/p2pool.conf")),
        ("win32", {"APPDATA": "C:/AppData"}, Path("C:/AppData/P2Pool/p2pool.conf")),
        ("darwin", {}, None),
    ],
)
def test_p2pool_conf_path(platform: str, env: dict[str, str], expected) -> None:
    assert get_p2pool_conf_path(platform=platform, env=env) == expected
