"""
Error taxonomy for Trade Analyzer.

Every failure raised by the store, the backup codec or the
entry helpers derives from TradeAnalyzerError, so the command
line shell can report it with a single handler.
"""


class TradeAnalyzerError(Exception):
    """Base class for all Trade Analyzer errors."""


class ValidationError(TradeAnalyzerError):
    """Malformed user input. Nothing was written."""


class StorageError(TradeAnalyzerError):
    """Underlying persistence failure. Store state is unchanged."""


class SnapshotImportError(TradeAnalyzerError):
    """
    Malformed backup document.

    Raised before any data is replaced; the store stays at its
    pre-import state.
    """


class NotFoundError(TradeAnalyzerError):
    """No trade with the requested id (strict updates only)."""


class CorruptStateError(TradeAnalyzerError):
    """The settings singleton row is missing."""
