"""
Trade Analyzer - Personal Trading Journal

A small self-hosted Python system for recording discretionary
wins and losses, reviewing them by week and month, and keeping
portable backups of the whole journal.
"""

__version__ = "0.1.0"
