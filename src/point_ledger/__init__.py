"""point-ledger: per-user point balances with per-user serialized mutations."""

__version__ = "0.1.0"
