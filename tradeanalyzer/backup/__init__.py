"""
Backup module for Trade Analyzer.

Handles JSON export and restore of the whole journal.
"""

from tradeanalyzer.backup.codec import (
    Snapshot,
    decode_snapshot,
    encode_snapshot,
    restore_backup,
    write_backup,
)

__all__ = ["Snapshot", "decode_snapshot", "encode_snapshot", "restore_backup", "write_backup"]
