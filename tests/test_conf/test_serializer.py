from __future__ import annotations

from pathlib import Path

import pytest

from dcm.conf.errors import ConfigWriteError
from dcm.conf.parser import parse_config, parse_text
from dcm.conf.roles import BITCOIN_ROLE, P2POOL_ROLE
from dcm.conf.schema import ConfigEntry
from dcm.conf.sections import ConfigSection
from dcm.conf.serializer import serialize_sections, write_config
from tests.memory_fs import MemoryFileSystem


def test_serialize_writes_headers_and_enabled_entries_only() -> None:
    sections = [
        ConfigSection("Network", [ConfigEntry("port", "9332"), ConfigEntry("listen", "1", enabled=False)]),
        ConfigSection("Payouts", [ConfigEntry("wallet", "abc")]),
        ConfigSection("Quiet", [ConfigEntry("x", "1", enabled=False)]),
    ]

    assert serialize_sections(sections) == "# Network\nport=9332\n\n# Payouts\nwallet=abc\n\n"


def test_serialize_nothing_enabled_is_empty() -> None:
    assert serialize_sections([]) == ""
    assert serialize_sections([ConfigSection("A", [ConfigEntry("x", "1", enabled=False)])]) == ""


@pytest.mark.parametrize(
    ("role", "text"),
    [
        (BITCOIN_ROLE, "server=1\nrpcallowip=1.2.3.4\nrpcallowip=5.6.7.8\nmystery=x\nflag\n"),
        (P2POOL_ROLE, "port=9332\nwallet=abc\nbitcoind_address=10.0.0.2\ncustom_thing=7\n"),
    ],
)
def test_round_trip_preserves_enabled_pairs(role, text: str) -> None:
    entries = parse_text(text, role.schema)
    sections = role.group(entries)
    enabled_before = sorted((e.key, e.value) for e in entries if e.enabled)

    reparsed = parse_text(serialize_sections(sections), role.schema)
    enabled_after = sorted((e.key, e.value) for e in reparsed if e.enabled)

    assert enabled_after == enabled_before


def test_disabled_entries_vanish_after_round_trip() -> None:
    entries = parse_text("server=1\nrpcuser=alice\n", BITCOIN_ROLE.schema)
    for entry in entries:
        if entry.key == "rpcuser":
            entry.toggle_enabled()

    text = serialize_sections(BITCOIN_ROLE.group(entries))

    assert "rpcuser" not in text
    assert "server=1" in text


def test_write_config_through_filesystem(memory_fs: MemoryFileSystem) -> None:
    path = Path("/home/alice/.p2pool/p2pool.conf")
    sections = P2POOL_ROLE.group(parse_config(path, P2POOL_ROLE.schema, memory_fs))

    text = write_config(path, sections, memory_fs)

    assert memory_fs.files[path] == text
    assert "# Network\nport=9332\n" in text


def test_write_error_wraps_oserror(memory_fs: MemoryFileSystem) -> None:
    path = Path("/home/alice/.p2pool/p2pool.conf")
    memory_fs.read_only.add(path)
    original = memory_fs.files[path]

    with pytest.raises(ConfigWriteError) as excinfo:
        write_config(path, [ConfigSection("A", [ConfigEntry("x", "1")])], memory_fs)

    assert excinfo.value.path == path
    assert memory_fs.files[path] == original


def test_write_config_on_disk_replaces_file(tmp_path: Path) -> None:
    path = tmp_path / "bitcoin.conf"
    path.write_text("old=1\n", encoding="utf-8")

    write_config(path, [ConfigSection("RPC", [ConfigEntry("server", "1")])])

    assert path.read_text(encoding="utf-8") == "# RPC\nserver=1\n\n"
    assert [p.name for p in tmp_path.iterdir()] == ["bitcoin.conf"]


def test_write_config_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigWriteError):
        write_config(tmp_path / "missing" / "bitcoin.conf", [ConfigSection("A", [ConfigEntry("x", "1")])])


def test_network_scope_survives_save_and_reload(memory_fs: MemoryFileSystem) -> None:
    path = Path("/home/alice/.bitcoin/bitcoin.conf")
    memory_fs.files[path] = "rpcport=8332\n[test]\nrpcport=18332\n"

    sections = BITCOIN_ROLE.group(parse_config(path, BITCOIN_ROLE.schema, memory_fs))
    text = write_config(path, sections, memory_fs)

    assert text == "# RPC\nrpcport=8332\ntest.rpcport=18332\n\n"
    reparsed = [(e.key, e.value) for e in parse_config(path, BITCOIN_ROLE.schema, memory_fs) if e.enabled]
    assert reparsed == [("rpcport", "8332"), ("test.rpcport", "18332")]
