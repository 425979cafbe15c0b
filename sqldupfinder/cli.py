from __future__ import annotations

import argparse
import datetime as dt
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn, TimeRemainingColumn

from . import __version__
from .console import RichLogger, stderr_console
from .input_sources import SourceFile, WalkError, iter_source_files
from .models import QueryOccurrence
from .normalize import normalize_dir_names, normalize_extensions
from .results import ResultWriter, aggregate, present, summarize
from .scanner import Scanner

DEFAULT_FOLDER = "."
DEFAULT_IGNORE = "vendor,node_modules"
DEFAULT_FILE_TYPE = ".php"


def default_worker_count() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class ScanConfig:
    folder: Path
    ignore_dirs: List[str]
    extensions: List[str]
    workers: int
    max_file_mb: Optional[int]


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="sqldupfinder",
        description="Find SQL statements that are duplicated across a source tree.",
    )
    ap.add_argument(
        "--folder",
        default=DEFAULT_FOLDER,
        help="Folder path to scan (default: current directory).",
    )
    ap.add_argument(
        "--ignore",
        default=DEFAULT_IGNORE,
        help=f"Comma separated list of folder names to ignore (default: {DEFAULT_IGNORE}).",
    )
    ap.add_argument(
        "--type",
        dest="file_type",
        default=DEFAULT_FILE_TYPE,
        help=f"File extension to scan, or a comma separated list (default: {DEFAULT_FILE_TYPE}).",
    )
    ap.add_argument(
        "--workers",
        type=int,
        default=default_worker_count(),
        help="Number of worker threads (default: logical CPU count).",
    )
    ap.add_argument(
        "--max-file-mb",
        type=int,
        default=None,
        help="Skip files larger than this many megabytes (default: scan every file).",
    )
    ap.add_argument(
        "--json",
        dest="json_out",
        help="Also write the duplicate groups with their locations to this JSON file.",
    )
    ap.add_argument("-q", "--quiet", action="store_true", help="No progress bar or info logs")
    ap.add_argument("-v", "--verbose", action="store_true", help="Verbose debug logs")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def build_config(args) -> ScanConfig:
    extensions = normalize_extensions(args.file_type)
    if not extensions:
        raise ValueError("--type must name at least one file extension")
    return ScanConfig(
        folder=Path(args.folder).expanduser(),
        ignore_dirs=normalize_dir_names(args.ignore),
        extensions=extensions,
        workers=max(1, args.workers),
        max_file_mb=args.max_file_mb,
    )


def scan_files(
    files: List[SourceFile],
    scanner: Scanner,
    workers: int,
    console: Console,
    logger: RichLogger,
    show_progress: bool = True,
) -> tuple[List[QueryOccurrence], Dict[str, int]]:
    stats = {
        "files_total": len(files),
        "files_scanned": 0,
        "files_skipped": 0,
    }
    occurrences: List[QueryOccurrence] = []
    if not files:
        return occurrences, stats

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold]Scanning files"),
        BarColumn(bar_width=None),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
        console=console,
        disable=not show_progress,
    )

    with progress:
        task_id = progress.add_task("scan", total=len(files))
        with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
            future_map = {executor.submit(scanner.scan_file, item): item for item in files}
            for future in as_completed(future_map):
                item = future_map[future]
                progress.advance(task_id)
                try:
                    result = future.result()
                except Exception as exc:
                    logger.warn(f"Failed to scan {item.display_name}: {exc}")
                    stats["files_skipped"] += 1
                    continue
                if result.skipped:
                    stats["files_skipped"] += 1
                    continue
                stats["files_scanned"] += 1
                occurrences.extend(result.occurrences)

    return occurrences, stats


def run_scan(args) -> int:
    console = stderr_console()
    logger = RichLogger(console=console, verbose=args.verbose, quiet=args.quiet)

    try:
        config = build_config(args)
    except ValueError as exc:
        logger.error(str(exc))
        return 2

    started_at = dt.datetime.now().isoformat(timespec="seconds")
    try:
        files = list(iter_source_files(config.folder, config.extensions, config.ignore_dirs))
    except WalkError as exc:
        logger.error(f"Error walking folder: {exc}")
        return 2

    logger.info(f"Scanning {len(files)} file(s) under {config.folder} with {config.workers} worker(s)")
    scanner = Scanner(logger=logger, max_file_mb=config.max_file_mb)
    occurrences, scan_stats = scan_files(
        files,
        scanner,
        config.workers,
        console,
        logger,
        show_progress=not args.quiet,
    )
    groups = aggregate(occurrences)
    summary = summarize(occurrences, groups)
    logger.info(
        f"Extracted {summary['statements_total']} statement(s), "
        f"{summary['statements_unique']} unique, from {scan_stats['files_scanned']} file(s)"
    )

    print(present(groups))

    if args.json_out:
        run_metadata: Dict[str, object] = {
            "folder": str(config.folder),
            "settings": {
                "ignore": config.ignore_dirs,
                "extensions": config.extensions,
                "workers": config.workers,
                "max_file_mb": config.max_file_mb,
            },
            "scan_stats": scan_stats,
            "started_at": started_at,
            "finished_at": dt.datetime.now().isoformat(timespec="seconds"),
        }
        try:
            ResultWriter(logger).write_json(Path(args.json_out).expanduser(), groups, summary, run_metadata)
        except OSError as exc:
            logger.error(f"Failed to write JSON report {args.json_out}: {exc}")
            return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    return run_scan(args)
