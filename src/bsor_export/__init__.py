"""BSOR Export - Tabular views of decoded replays."""
from .tables import replay_tables, write_tables

__all__ = ["replay_tables", "write_tables"]
