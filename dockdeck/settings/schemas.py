"""Метаданные config.json, которые не относятся ни к одной группе."""

from __future__ import annotations

from typing import Any, Dict

# Ключи верхнего уровня, которые записываются рядом с группами
DEFAULT_METADATA: Dict[str, Any] = {
    "version": "1.0.0",
    "schema_version": 1,
}
