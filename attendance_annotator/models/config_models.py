from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclass for the attendance annotator.

Built by ``attendance_annotator.config.loader.load_config`` from the YAML
file after schema validation; defaults are applied there.
"""

__all__ = [
    "AnnotateConfig",
]


@dataclass(frozen=True)
class AnnotateConfig:
    """Root configuration for one annotator run."""
    source_directory: str  # Directory scanned for .xlsx when no files are given
    output_directory: str  # 匯出目錄 (default: source_directory)
    output_prefix: str = "邏輯處理_"  # prefix over the original base filename
    sheet_title: str = "考勤處理結果"  # exported sheet name
    preview_rows: int = 20  # rows shown by --preview
    keep_na_strings: list[str] = field(default_factory=list)  # excluded from pandas NA parsing
