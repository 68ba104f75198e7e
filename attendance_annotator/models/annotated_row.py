from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..glossary import ANOMALY_MARKER, FRIDAY_FLAG, MARK

"""AnnotatedRow model: one attendance row after the rule engine ran.

The row values stay an open mapping (well-known glossary fields plus any
other spreadsheet column, passed through untouched). The set of fields the
engine overwrote travels beside the values, never inside them, and is only
used by the writer to decide which cells get highlighted.
"""

__all__ = [
    "AnnotatedRow",
]


@dataclass(frozen=True)
class AnnotatedRow:
    """Row values paired with the fields the rule engine changed."""
    values: dict[str, Any]  # 欄位名稱 -> 值 (含 異動 / 星期五)
    modified_fields: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_friday(self) -> bool:
        return self.values.get(FRIDAY_FLAG) == MARK

    @property
    def is_modified(self) -> bool:
        return self.values.get(ANOMALY_MARKER) == MARK

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)
