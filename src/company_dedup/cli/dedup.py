"""Commands that group company names and inspect their normalized forms."""

from __future__ import annotations

from pathlib import Path
from time import perf_counter
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from company_dedup.pipeline.deduplication import block_key, deduplicate_names, normalize, tokenize
from company_dedup.pipeline.deduplication.processor import DeduplicationResult

from .common import CLIError, console, get_state, resolve_path


def _print_plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _render_groups(result: DeduplicationResult) -> None:
    _print_plain(f"\nFound {len(result.groups)} duplicate groups:\n")
    for index, group in enumerate(result.groups, start=1):
        _print_plain(f"Group {index}:")
        for name in group.members:
            _print_plain(f"  - {name}")
        _print_plain("")


def _render_stats(result: DeduplicationResult) -> None:
    stats = result.stats
    blocking = stats.get("blocking", {})
    table = Table(title="Deduplication Summary", box=None)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Names", str(stats.get("input", {}).get("total_names", 0)))
    table.add_row("Threshold", f"{stats.get('threshold', 0.0):.2f}")
    table.add_row("Blocks", str(blocking.get("total_blocks", 0)))
    table.add_row("Largest Block", str(blocking.get("max_block_size", 0)))
    table.add_row("Comparisons", str(stats.get("comparisons", 0)))
    table.add_row("Groups", str(stats.get("groups", 0)))
    table.add_row("Grouped Names", str(stats.get("grouped_names", 0)))
    console.print(table)


def group_command(
    ctx: typer.Context,
    *,
    input_path: Path = typer.Argument(
        Path("companies.txt"),
        help="Text file with one company name per line.",
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Jaccard similarity required to join a group, in (0, 1].",
        show_default=False,
    ),
    output_path: Optional[Path] = typer.Option(
        None,
        "--output",
        help="JSON destination for the groups and run statistics; relative paths land in paths.output_dir.",
    ),
    show_stats: bool = typer.Option(
        False,
        "--stats",
        help="Print blocking and comparison statistics.",
    ),
) -> None:
    state = get_state(ctx)
    if threshold is not None and not 0.0 < threshold <= 1.0:
        raise CLIError("--threshold must be greater than 0.0 and at most 1.0")

    source = resolve_path(input_path)
    destination = state.settings.paths.resolve_output(output_path) if output_path else None

    start = perf_counter()
    try:
        result = deduplicate_names(
            source,
            destination,
            threshold=threshold,
            settings=state.settings,
        )
    except UnicodeDecodeError as exc:
        raise CLIError(f"Unable to decode {source} as UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise CLIError(f"Unable to read or write files: {exc}") from exc
    elapsed_ms = (perf_counter() - start) * 1000

    total = result.stats.get("input", {}).get("total_names", 0)
    _print_plain(f"Grouped {total} companies in {elapsed_ms:.3f}ms.")
    _render_groups(result)

    if show_stats:
        _render_stats(result)
    if destination is not None:
        console.print(f"[green]Groups written to[/green] {escape(str(destination))}", highlight=False)


def normalize_command(
    ctx: typer.Context,
    *,
    names: List[str] = typer.Argument(..., help="Raw company names to inspect."),
) -> None:
    state = get_state(ctx)
    noise_words = state.settings.policies.grouping.effective_noise_words
    for raw in names:
        tokens = tokenize(raw, noise_words)
        _print_plain(
            f"{raw!r} -> {normalize(raw, noise_words)!r} "
            f"tokens={sorted(tokens)} block={block_key(tokens)!r}"
        )


__all__ = ["group_command", "normalize_command"]
