#!/usr/bin/env python3
"""Quick perf benchmark for linting a directory of text and markdown files."""

from __future__ import annotations

import argparse
import cProfile
import io
from pathlib import Path
import pstats
import statistics
import time

from tqdm import tqdm

from txtlint import BUILTIN_RULES, TextLintEngine
from txtlint.parser import MARKDOWN_EXTENSIONS

TEXT_EXTENSIONS = (".txt", *MARKDOWN_EXTENSIONS)


def _collect_files(root: Path) -> list[Path]:
    files = sorted(path for path in root.rglob("*") if path.suffix.lower() in TEXT_EXTENSIONS)
    return [path for path in files if path.is_file() and path.stat().st_size > 0]


def _run_once(
    engine: TextLintEngine,
    files: list[Path],
    *,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int]:
    start = time.perf_counter()
    total_diagnostics = 0
    iterator = tqdm(files, desc=label, unit="file") if show_progress else files
    for path in iterator:
        total_diagnostics += len(engine.lint_file(path).messages)
    duration = time.perf_counter() - start
    return duration, len(files), total_diagnostics


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark lint throughput with the built-in rules")
    parser.add_argument("root", type=Path, help="Directory to scan for .txt and markdown files")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Run cProfile and print top hotspots",
    )
    parser.add_argument(
        "--profile-top",
        type=int,
        default=30,
        help="Number of cProfile rows to print (default: 30)",
    )
    parser.add_argument(
        "--profile-sort",
        type=str,
        default="tottime",
        help="cProfile sort key (default: tottime, common: cumulative)",
    )
    parser.add_argument(
        "--limit-files",
        type=int,
        default=0,
        help="Optional file limit for quick profiling/smoke tests (0 = all files)",
    )
    args = parser.parse_args()

    root: Path = args.root
    if not root.is_dir():
        raise SystemExit(f"Invalid root directory: {root}")

    files = _collect_files(root)
    if not files:
        raise SystemExit(f"No non-empty text or markdown files found under {root}")
    if args.limit_files > 0:
        files = files[: args.limit_files]

    show_progress = not args.no_progress
    engine = TextLintEngine()
    engine.setup_rules(BUILTIN_RULES)

    def _benchmark() -> tuple[list[float], int, int]:
        warmups = max(args.warmups, 0)
        for warmup_idx in range(warmups):
            _run_once(engine, files, label=f"warmup {warmup_idx + 1}/{warmups}", show_progress=show_progress)

        timings: list[float] = []
        files_count = 0
        diagnostics_count = 0
        runs = max(args.runs, 1)
        for run_idx in range(runs):
            duration, files_count, diagnostics_count = _run_once(
                engine,
                files,
                label=f"run {run_idx + 1}/{runs}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, files_count, diagnostics_count

    try:
        if args.profile:
            profiler = cProfile.Profile()
            profiler.enable()
            timings, files_count, diagnostics_count = _benchmark()
            profiler.disable()
            stream = io.StringIO()
            stats = pstats.Stats(profiler, stream=stream)
            stats.sort_stats(args.profile_sort).print_stats(max(args.profile_top, 1))
            print("\n[cProfile top functions]")
            print(stream.getvalue())
        else:
            timings, files_count, diagnostics_count = _benchmark()
    finally:
        engine.reset_rules()

    mean = statistics.mean(timings)
    print(f"Dataset: {root}")
    print(f"Files: {files_count}")
    print(f"Diagnostics: {diagnostics_count}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Files/s (mean): {files_count / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
