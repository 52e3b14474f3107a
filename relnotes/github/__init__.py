"""GitHub adapters (``gh`` CLI)."""

from __future__ import annotations
