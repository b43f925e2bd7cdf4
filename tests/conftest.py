"""
Shared pytest fixtures for Daemon Config Manager tests.

Provides an in-memory filesystem with a small daemon config tree and
sample config text for both roles.
"""

from pathlib import Path

import pytest

from tests.memory_fs import MemoryFileSystem


BITCOIN_CONF_TEXT = """\
# Bitcoin Core settings
server=1
rpcuser=alice
rpcport=8332
rpcallowip=127.0.0.1
rpcallowip=10.0.0.0/8

[main]
mycustomflag
=orphan
"""

P2POOL_CONF_TEXT = "port=9332\nwallet=abc\n# comment\n\n"


# -----------------------------------------------------------------------------
# Filesystem Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """
    In-memory tree::

        /home/alice/.bitcoin/bitcoin.conf
        /home/alice/.p2pool/p2pool.conf
        /home/alice/notes/
        /home/alice/readme.txt
    """
    fs = MemoryFileSystem(
        files={
            "/home/alice/.bitcoin/bitcoin.conf": BITCOIN_CONF_TEXT,
            "/home/alice/.p2pool/p2pool.conf": P2POOL_CONF_TEXT,
            "/home/alice/readme.txt": "hello",
        },
        dirs=["/home/alice/notes"],
    )
    return fs


@pytest.fixture
def home_dir() -> Path:
    return Path("/home/alice")


@pytest.fixture
def default_paths(home_dir: Path) -> dict[str, Path]:
    return {
        "bitcoin": home_dir / ".bitcoin" / "bitcoin.conf",
        "p2pool": home_dir / ".p2pool" / "p2pool.conf",
    }


@pytest.fixture(autouse=True)
def _isolate_dcm_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user settings and DCM_* variables out of every test."""
    monkeypatch.setenv("DCM_HOME", str(tmp_path / "dcm_home"))
    for var in (
        "DCM_START_DIR",
        "DCM_DEFAULT_ROLE",
        "DCM_BITCOIN_CONF",
        "DCM_P2POOL_CONF",
        "DCM_LOG_LEVEL",
        "DCM_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
