"""
Schema tables and entry model for daemon configuration files.

A ``ConfigSchema`` row describes one recognized key. The tables here are
static and never mutated; a parsed file becomes a list of ``ConfigEntry``
objects that may reference a schema row.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

# bitcoin.conf network sections. A key under ``[test]`` is stored as
# ``test.<key>``, the dotted form bitcoind also accepts at top level.
NETWORK_SCOPES: tuple[str, ...] = ("main", "test", "signet", "regtest")


def split_scope(key: str) -> tuple[str, str]:
    """Split ``"test.rpcport"`` into ``("test", "rpcport")``; unscoped keys get ``""``."""
    scope, sep, name = key.partition(".")
    if sep and scope in NETWORK_SCOPES and name:
        return scope, name
    return "", key


def scoped_key(scope: str, key: str) -> str:
    return f"{scope}.{key}" if scope else key


class ConfigType(str, Enum):
    """Declared value type of a known key."""

    STRING = "String"
    INTEGER = "Integer"
    BOOLEAN = "Boolean"


@dataclass(frozen=True)
class ConfigSchema:
    """Static descriptor of a recognized configuration key."""

    key: str
    """Key as written in the file."""

    value_type: ConfigType
    """Declared type; Boolean keys toggle between "0" and "1"."""

    section: str
    """Section the key is displayed under."""

    description: str
    """Help text shown in the details panel."""

    default: str = ""
    """Value used when the key is absent from the file."""


@dataclass
class ConfigEntry:
    """One configuration line, mutable during an editing session."""

    key: str
    value: str
    schema: Optional[ConfigSchema] = None
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.schema is not None and self.schema.key != self.base_key:
            raise ValueError(
                f"Entry key {self.key!r} does not match schema key {self.schema.key!r}"
            )

    @property
    def scope(self) -> str:
        """Network section the entry belongs to, ``""`` for global keys."""
        return split_scope(self.key)[0]

    @property
    def base_key(self) -> str:
        return split_scope(self.key)[1]

    @classmethod
    def from_default(cls, schema: ConfigSchema) -> "ConfigEntry":
        """Disabled entry holding the schema default."""
        return cls(key=schema.key, value=schema.default, schema=schema, enabled=False)

    @property
    def is_known(self) -> bool:
        return self.schema is not None

    @property
    def is_boolean(self) -> bool:
        return self.schema is not None and self.schema.value_type is ConfigType.BOOLEAN

    @property
    def type_label(self) -> str:
        return self.schema.value_type.value if self.schema is not None else "Unknown"

    @property
    def description(self) -> str:
        if self.schema is None:
            return "Custom configuration option."
        return self.schema.description

    def toggle_enabled(self) -> None:
        self.enabled = not self.enabled

    def flip_boolean(self) -> None:
        """Flip a boolean value between "0" and "1" and enable the entry."""
        self.value = "0" if self.value == "1" else "1"
        self.enabled = True

    def commit(self, value: str) -> None:
        self.value = value
        self.enabled = True


def schema_by_key(table: Iterable[ConfigSchema]) -> dict[str, ConfigSchema]:
    """Index a schema table by key."""
    return {row.key: row for row in table}


def _row(key: str, value_type: ConfigType, section: str, description: str, default: str = "") -> ConfigSchema:
    return ConfigSchema(key=key, value_type=value_type, section=section, description=description, default=default)


_S = ConfigType.STRING
_I = ConfigType.INTEGER
_B = ConfigType.BOOLEAN
_ZMQ_DEFAULT = "tcp://127.0.0.1:28332"

BITCOIN_SCHEMA: tuple[ConfigSchema, ...] = (
    # Core
    _row("datadir", _S, "Core", "Directory to store data."),
    _row("txindex", _B, "Core", "Maintain a full transaction index.", "0"),
    _row("prune", _I, "Core", "Reduce storage requirements by enabling pruning (deleting) of old blocks. 0 = disable.", "0"),
    _row("blocksonly", _B, "Core", "Reject transactions from network peers.", "0"),
    _row("dbcache", _I, "Core", "Database cache size in megabytes.", "450"),
    _row("maxmempool", _I, "Core", "Keep the transaction memory pool below <n> megabytes.", "300"),
    _row("pid", _S, "Core", "Specify pid file. Relative paths will be prefixed by a net-specific datadir location.", "bitcoind.pid"),
    # Network
    _row("testnet", _B, "Network", "Run on the test network.", "0"),
    _row("regtest", _B, "Network", "Run on the regression test network.", "0"),
    _row("signet", _B, "Network", "Run on the signet network.", "0"),
    _row("listen", _B, "Network", "Accept connections from outside.", "1"),
    _row("bind", _S, "Network", "Bind to given address and always listen on it. Use [host]:port notation for IPv6.", "0.0.0.0"),
    _row("port", _I, "Network", "Listen for connections on <port>.", "8333"),
    _row("maxconnections", _I, "Network", "Maintain at most <n> connections to peers.", "125"),
    _row("proxy", _S, "Network", "Connect through SOCKS5 proxy."),
    _row("onion", _S, "Network", "Use separate SOCKS5 proxy to reach peers via Tor onion services."),
    _row("upnp", _B, "Network", "Use UPnP to map the listening port.", "0"),
    # RPC
    _row("server", _B, "RPC", "Accept command line and JSON-RPC commands.", "0"),
    _row("rpcuser", _S, "RPC", "Username for JSON-RPC connections."),
    _row("rpcpassword", _S, "RPC", "Password for JSON-RPC connections."),
    _row("rpcauth", _S, "RPC", "Username and hashed password for JSON-RPC connections."),
    _row("rpcport", _I, "RPC", "Listen for JSON-RPC connections on <port>.", "8332"),
    _row("rpcbind", _S, "RPC", "Bind to given address to listen for JSON-RPC connections."),
    _row(
        "rpcallowip", _S, "RPC",
        "Allow JSON-RPC connections from specified source. Valid for <ip> are a single IP (e.g. 1.2.3.4), "
        "a network/netmask (e.g. 1.2.3.4/255.255.255.0) or a network/CIDR (e.g. 1.2.3.4/24).",
    ),
    _row("rpcthreads", _I, "RPC", "Set the number of threads to service RPC calls.", "4"),
    # Wallet
    _row("disablewallet", _B, "Wallet", "Do not load the wallet and disable wallet RPC calls.", "0"),
    _row("fallbackfee", _S, "Wallet", "A fee rate (in BTC/kvB) that will be used when fee estimation has insufficient data.", "0.00021"),
    _row("discardfee", _S, "Wallet", "The fee rate (in BTC/kvB) that indicates your tolerance for discarding change by adding it to the fee.", "0.0001"),
    _row("mintxfee", _S, "Wallet", "Fees (in BTC/kvB) smaller than this are considered zero fee for transaction creation.", "0.00001"),
    _row("paytxfee", _S, "Wallet", "Fee (in BTC/kvB) to add to transactions you send.", "0.00"),
    # Debug
    _row("debug", _S, "Debug", "Output debugging information (default: 0, supplying <category> is optional)."),
    _row("logips", _B, "Debug", "Include IP addresses in debug output.", "0"),
    _row("shrinkdebugfile", _B, "Debug", "Shrink debug.log file on client startup (default: 1 when no -debug).", "1"),
    # Mining
    _row("blockmaxweight", _I, "Mining", "Set maximum BIP141 block weight (default: 3996000).", "3996000"),
    _row("minrelaytxfee", _S, "Mining", "Fees (in BTC/kvB) smaller than this are considered zero fee for relaying, mining and transaction creation.", "0.00001"),
    # ZMQ
    _row("zmqpubhashblock", _S, "ZMQ", "Enable publish hash block in <address>.", _ZMQ_DEFAULT),
    _row("zmqpubhashtx", _S, "ZMQ", "Enable publish hash transaction in <address>.", _ZMQ_DEFAULT),
    _row("zmqpubrawblock", _S, "ZMQ", "Enable publish raw block in <address>.", _ZMQ_DEFAULT),
    _row("zmqpubrawtx", _S, "ZMQ", "Enable publish raw transaction in <address>.", _ZMQ_DEFAULT),
)

# Sections match classify_key() for every key, so a known key and an
# unknown key of the same name land in the same tab.
P2POOL_SCHEMA: tuple[ConfigSchema, ...] = (
    # Authentication
    _row("rpcuser", _S, "Authentication", "Username for the bitcoind JSON-RPC interface."),
    _row("rpcpassword", _S, "Authentication", "Password for the bitcoind JSON-RPC interface."),
    # Bitcoin Node
    _row("bitcoind_address", _S, "Bitcoin Node", "Host of the bitcoind node p2pool talks to.", "127.0.0.1"),
    _row("bitcoind_rpc_port", _I, "Bitcoin Node", "bitcoind JSON-RPC port.", "8332"),
    _row("bitcoind_p2p_port", _I, "Bitcoin Node", "bitcoind peer-to-peer port.", "8333"),
    _row("bitcoind_rpc_ssl", _B, "Bitcoin Node", "Use SSL for the bitcoind JSON-RPC connection.", "0"),
    # Network
    _row("port", _I, "Network", "Port miners connect to (worker interface).", "9332"),
    _row("p2pool_port", _I, "Network", "Port for the p2pool peer-to-peer network.", "9333"),
    _row("listen", _B, "Network", "Accept incoming p2pool peer connections.", "1"),
    _row("external_address", _S, "Network", "Public address advertised to other p2pool nodes."),
    # Payouts
    _row("wallet", _S, "Payouts", "Address that receives mining payouts."),
    _row("payout_fee", _S, "Payouts", "Percentage of payouts taken as node fee.", "0"),
    # General Settings
    _row("net", _S, "General Settings", "Network to mine on (bitcoin, testnet, ...).", "bitcoin"),
    _row("donation", _S, "General Settings", "Percentage of generated coins donated to the p2pool developers.", "0"),
    _row("max_conns", _I, "General Settings", "Maximum incoming p2pool connections.", "40"),
    _row("outgoing_conns", _I, "General Settings", "Outgoing p2pool connections to maintain.", "6"),
    _row("logfile", _S, "General Settings", "Log file path."),
    _row("irc_announce", _B, "General Settings", "Announce found blocks on IRC.", "0"),
)
