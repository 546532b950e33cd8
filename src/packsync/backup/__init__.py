"""Profile backup export for packsync."""

from __future__ import annotations

from .exporter import BackupExporter

__all__ = ["BackupExporter"]
