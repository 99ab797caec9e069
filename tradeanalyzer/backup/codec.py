"""
Backup codec.

Serializes the whole journal (trades + settings) to a portable
JSON document and parses it back. Parsing is all-or-nothing: a
single bad trade entry rejects the whole document, so a restore
never starts from partially understood data.

Document layout:
    {
      "trades": [{"id", "date", "amount", "type", "description"}, ...],
      "settings": {"initial_fund": number, "currency": string},
      "export_date": ISO-8601 string
    }
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from tradeanalyzer.core.errors import SnapshotImportError, ValidationError
from tradeanalyzer.core.models import Settings, TradeRecord

logger = logging.getLogger(__name__)

BACKUP_FILENAME_FORMAT = "trade_backup_%Y%m%d_%H%M%S.json"


@dataclass
class Snapshot:
    """Complete copy of the journal."""
    trades: List[TradeRecord] = field(default_factory=list)
    settings: Optional[Settings] = None
    exported_at: Optional[datetime] = None


def encode_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot to a JSON document."""
    exported_at = snapshot.exported_at or datetime.now()

    data = {
        "trades": [trade.to_dict() for trade in snapshot.trades],
        "settings": snapshot.settings.to_dict() if snapshot.settings else None,
        "export_date": exported_at.isoformat(),
    }

    return json.dumps(data, ensure_ascii=False, indent=2)


def _decode_trade(index: int, entry) -> TradeRecord:
    if not isinstance(entry, dict):
        raise SnapshotImportError(f"Trade #{index} is not an object")

    entry = dict(entry)
    # Older backups may carry numeric ids
    if isinstance(entry.get("id"), int) and not isinstance(entry.get("id"), bool):
        entry["id"] = str(entry["id"])

    try:
        return TradeRecord.from_dict(entry)
    except ValidationError as e:
        raise SnapshotImportError(f"Trade #{index} ({entry.get('id', '?')}): {e}") from e


def _decode_settings(data) -> Optional[Settings]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise SnapshotImportError("Settings is not an object")

    missing = [key for key in ("initial_fund", "currency") if key not in data]
    if missing:
        raise SnapshotImportError(f"Settings missing field(s): {', '.join(missing)}")

    try:
        return Settings(initial_fund=data["initial_fund"], currency=data["currency"])
    except ValidationError as e:
        raise SnapshotImportError(f"Settings: {e}") from e


def decode_snapshot(document: Union[str, bytes, dict]) -> Snapshot:
    """
    Parse a backup document.

    Raises SnapshotImportError on the first problem found.
    """
    if isinstance(document, (str, bytes)):
        try:
            data = json.loads(document)
        except ValueError as e:
            raise SnapshotImportError(f"Backup is not valid JSON: {e}") from e
    else:
        data = document

    if not isinstance(data, dict):
        raise SnapshotImportError("Backup document must be a JSON object")

    raw_trades = data.get("trades")
    if not isinstance(raw_trades, list):
        raise SnapshotImportError("Backup document has no trades list")

    trades = [_decode_trade(i, entry) for i, entry in enumerate(raw_trades)]

    seen = set()
    for trade in trades:
        if trade.id in seen:
            raise SnapshotImportError(f"Duplicate trade id: {trade.id}")
        seen.add(trade.id)

    exported_at = None
    raw_export_date = data.get("export_date")
    if isinstance(raw_export_date, str):
        try:
            exported_at = datetime.fromisoformat(raw_export_date)
        except ValueError:
            logger.warning(f"Ignoring unreadable export_date: {raw_export_date!r}")

    return Snapshot(
        trades=trades,
        settings=_decode_settings(data.get("settings")),
        exported_at=exported_at,
    )


def backup_filename(now: Optional[datetime] = None) -> str:
    """File name for a new backup, e.g. trade_backup_20240105_143000.json."""
    return (now or datetime.now()).strftime(BACKUP_FILENAME_FORMAT)


def write_backup(store, directory: str) -> Path:
    """
    Export the store to a new JSON file in directory.

    Returns file path.
    """
    snapshot = store.export_snapshot()

    path = Path(directory) / backup_filename(snapshot.exported_at)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode_snapshot(snapshot), encoding="utf-8")

    logger.info(f"Backup of {len(snapshot.trades)} trades written to {path}")
    return path


def restore_backup(store, filepath: str) -> Snapshot:
    """
    Replace the store's content with a backup file.

    The file is fully parsed before the store is touched.
    """
    try:
        document = Path(filepath).read_bytes()
    except OSError as e:
        raise SnapshotImportError(f"Cannot read backup {filepath}: {e}") from e

    snapshot = decode_snapshot(document)
    store.import_snapshot(snapshot)

    logger.info(f"Restored {len(snapshot.trades)} trades from {filepath}")
    return snapshot
