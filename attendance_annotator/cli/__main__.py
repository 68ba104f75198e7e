from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from attendance_annotator.config.loader import ConfigError, default_config, load_config, resolve_config_path
from attendance_annotator.logging.init import log_summary, set_debug, setup_logging
from attendance_annotator.models.config_models import AnnotateConfig
from attendance_annotator.models.workbook_file import FileStatus, WorkbookFile
from attendance_annotator.services.orchestrator import ProcessingError, process_all
from attendance_annotator.services.preview import render_preview_lines
from attendance_annotator.services.summary import render_summary_fields

"""CLI entrypoint.

Flow:
- Load ``.env`` (ATTENDANCE_CONFIG may point at the YAML config)
- Load config (optional when workbooks are given explicitly)
- Annotate each workbook and export ``邏輯處理_<name>.xlsx``
- Print the SUMMARY line; exit code reflects per-file outcome
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; explicit environment wins by default."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Friday attendance anomaly annotator")
    p.add_argument("files", nargs="*", help="Workbooks to process (default: scan source_directory)")
    p.add_argument("--config", default=None, help="YAML config path (default: $ATTENDANCE_CONFIG or config/annotate.yml)")
    p.add_argument("--output-dir", default=None, help="Override output_directory")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--preview", action="store_true", help="Print the first annotated rows of each workbook")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> AnnotateConfig:
    path = resolve_config_path(args.config)
    # 指定檔案且無設定檔 -> defaults (輸出到目前目錄)
    if args.files and args.config is None and not path.exists():
        cfg = default_config()
    else:
        cfg = load_config(path)
    if args.output_dir:
        cfg = replace(cfg, output_directory=args.output_dir)
    return cfg


def _print_preview(workbooks: list[WorkbookFile], limit: int) -> None:
    for wb in workbooks:
        if wb.status != FileStatus.SUCCESS:
            continue
        print(f"FILE: {wb.name} rows={len(wb.rows)}")
        for line in render_preview_lines(wb.rows, limit=limit):
            print(f"  {line}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    files = [Path(f) for f in args.files] if args.files else None
    if files is None:
        directory = Path(cfg.source_directory)
        if not directory.exists():
            logger.error(f"directory not found: {directory}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")

    try:
        result, workbooks = process_all(cfg, files=files)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if args.preview:
        _print_preview(workbooks, cfg.preview_rows)

    total_files = result.success_files + result.failed_files
    log_summary(render_summary_fields(total_files, result))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
