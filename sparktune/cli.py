# cli.py
import argparse
import json
import logging
import math
import sys
from typing import List
from typing import Optional
from typing import Tuple

from rich.console import Console
from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sparktune.analytics.explainer import MEMORY_PLAIN_LANGUAGE
from sparktune.analytics.explainer import describe
from sparktune.analytics.explainer import explain
from sparktune.analytics.explainer import memory_shares
from sparktune.config.settings import Settings
from sparktune.config.settings import ensure_within_bounds
from sparktune.config.settings import load_settings
from sparktune.engine import compute_allocation
from sparktune.models.allocation import AllocationResult
from sparktune.models.allocation import MemoryShares
from sparktune.models.cluster_config import ClusterConfig
from sparktune.models.cluster_config import StorageFormat
from sparktune.models.cluster_config import WorkloadType
from sparktune.storage.arrow_io import ParquetSink
from sparktune.utils.logging import setup_logging
from sparktune.utils.units import VOLUME_RANGES
from sparktune.utils.units import VolumeUnit
from sparktune.utils.units import format_volume
from sparktune.utils.units import to_gb

logger = logging.getLogger(__name__)

console = Console()

MEMORY_BAR_WIDTH = 40


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Spark executor sizing calculator (Rule of 5)"
    )
    parser.add_argument("--config", type=str, help="YAML settings file with defaults")
    parser.add_argument("--nodes", type=int, help="Total worker nodes (1-100)")
    parser.add_argument(
        "--cores-per-node", type=int, help="vCores per node (2-128, step 2)"
    )
    parser.add_argument(
        "--ram-per-node", type=float, help="RAM per node in GB (8-512, step 8)"
    )
    parser.add_argument(
        "--workload",
        type=str,
        choices=[w.value for w in WorkloadType],
        help="standard = 10%% overhead, heavy (PySpark/Iceberg/Delta) = 20%% overhead",
    )
    parser.add_argument(
        "--storage-format",
        type=str,
        choices=[s.value for s in StorageFormat],
        help="Table format of the data being processed",
    )
    parser.add_argument(
        "--data-volume",
        type=float,
        help="Estimated raw data processed per job, in --volume-unit",
    )
    parser.add_argument(
        "--volume-unit",
        type=str,
        default=VolumeUnit.GB.value,
        choices=[u.value for u in VolumeUnit],
        help="Unit of --data-volume",
    )
    parser.add_argument(
        "--off-heap",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable off-heap memory to reduce GC pressure (overrides the settings file)",
    )
    parser.add_argument(
        "--explain", action="store_true", help="Show the formulas behind the plan"
    )
    parser.add_argument(
        "--beginner",
        action="store_true",
        help="Add plain-language notes explaining each setting",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the plan as JSON instead of tables"
    )
    parser.add_argument(
        "--sink-path",
        type=str,
        help="Path to save the plan as a parquet dataset (e.g., s3://bucket/path)",
    )
    parser.add_argument("--log-level", type=str, help="Logging level, e.g. DEBUG")
    return parser


def _data_volume_gb(value: float, unit: str) -> float:
    volume_range = VOLUME_RANGES[VolumeUnit(unit)]
    if value < volume_range.minimum or value > volume_range.maximum:
        raise ValueError(
            f"--data-volume must be between {volume_range.minimum} and "
            f"{volume_range.maximum} {unit}, got {value:g}"
        )
    return to_gb(value, unit)


def resolve_config(args: argparse.Namespace, settings: Settings) -> ClusterConfig:
    """Layer CLI flags over the settings file over built-in defaults."""
    overrides = {
        "nodes": args.nodes,
        "cores_per_node": args.cores_per_node,
        "ram_per_node": args.ram_per_node,
        "workload_type": args.workload,
        "storage_format": args.storage_format,
        "enable_off_heap": args.off_heap,
    }
    if args.data_volume is not None:
        overrides["data_volume_gb"] = _data_volume_gb(args.data_volume, args.volume_unit)

    values = settings.cluster.to_dict()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ensure_within_bounds(ClusterConfig(**values))


def _render_summary(config: ClusterConfig, result: AllocationResult) -> None:
    rec_table = Table(title="Allocation Summary", show_header=False, box=None)
    rec_table.add_column("Metric", style="cyan bold")
    rec_table.add_column("Value", style="green")
    rec_table.add_column("Flag", style="dim")

    rec_table.add_row(
        "Total Executors",
        f"{result.total_executors} ({result.executors_per_node} per node)",
        "--num-executors",
    )
    rec_table.add_row("Executor Cores", str(result.executor_cores), "--executor-cores")
    rec_table.add_row(
        "Executor Memory",
        f"{math.floor(result.executor_memory)}g + {result.memory_overhead:.2f}g overhead",
        "--executor-memory",
    )
    if config.data_volume_gb > 0:
        rec_table.add_row(
            "Shuffle Partitions",
            f"{result.shuffle_partitions} (for {format_volume(config.data_volume_gb)})",
            "spark.sql.shuffle.partitions",
        )
    rec_table.add_row(
        "Default Parallelism",
        f"{result.default_parallelism} (~2x total cores)",
        "spark.default.parallelism",
    )
    rec_table.add_row(
        "Advisory Partition Size",
        result.advisory_partition_size,
        "spark.sql.adaptive.advisoryPartitionSizeInBytes",
    )
    console.print(Panel(rec_table, expand=False, border_style="green"))


def memory_bar_cells(
    shares: MemoryShares, width: int = MEMORY_BAR_WIDTH
) -> Tuple[int, int, int]:
    """Overhead, off-heap and heap cell counts; always sums to ``width``."""
    # overhead can exceed the container when the heap goes negative
    overhead_cells = min(width, round(width * shares.overhead_pct / 100))
    off_heap_cells = min(
        width - overhead_cells, round(width * shares.off_heap_pct / 100)
    )
    return overhead_cells, off_heap_cells, width - overhead_cells - off_heap_cells


def _render_memory(result: AllocationResult) -> None:
    shares = memory_shares(result)
    overhead_cells, off_heap_cells, heap_cells = memory_bar_cells(shares)
    bar = Text()
    bar.append("█" * overhead_cells, style="red")
    bar.append("█" * off_heap_cells, style="yellow")
    bar.append("█" * heap_cells, style="blue")

    grid = Table.grid(padding=(0, 2))
    grid.add_column()
    grid.add_column(justify="right")
    grid.add_column(justify="right")
    grid.add_row(
        "[red]Overhead[/]",
        f"{result.memory_overhead:.2f} GB",
        f"{shares.overhead_pct:.1f}%",
    )
    if result.off_heap_memory > 0:
        grid.add_row(
            "[yellow]Off-Heap[/]",
            f"{result.off_heap_memory:.2f} GB",
            f"{shares.off_heap_pct:.1f}%",
        )
    grid.add_row(
        "[blue]Heap[/]",
        f"{result.executor_memory:.2f} GB",
        f"{shares.heap_pct:.1f}%",
    )

    console.print(
        Panel(
            Group(bar, grid),
            title=f"Container Memory Split (Total: {result.total_memory_per_executor} GB)",
            expand=False,
            border_style="blue",
        )
    )


def _render_warnings(result: AllocationResult) -> None:
    if result.critical_warnings:
        lines = "\n".join(escape(w) for w in result.critical_warnings)
        console.print(
            Panel(lines, title="Critical Configuration Issue", border_style="bold red")
        )
    if result.warnings:
        lines = "\n".join(f"- {escape(w)}" for w in result.warnings)
        console.print(Panel(lines, title="Optimization Tips", border_style="yellow"))


def _render_explanation(config: ClusterConfig, result: AllocationResult) -> None:
    table = Table(title="Live Math", show_header=True, header_style="bold magenta")
    table.add_column("Step", style="cyan")
    table.add_column("Formula")
    table.add_column("Value", style="green")
    for step in explain(config, result):
        table.add_row(step.label, escape(step.formula), escape(step.value))
    console.print(table)


def _render_beginner_notes(config: ClusterConfig) -> None:
    lines = [
        f"[cyan bold]{title}:[/] {escape(text)}"
        for title, text in describe(config).items()
    ]
    lines.append(f"[blue bold]Memory Split:[/] {escape(MEMORY_PLAIN_LANGUAGE)}")
    console.print(Panel("\n".join(lines), title="Beginner Notes", border_style="dim"))


def render(
    config: ClusterConfig,
    result: AllocationResult,
    show_explain: bool,
    beginner: bool = False,
) -> None:
    console.rule("[bold magenta]Spark Allocation Plan[/]")
    _render_summary(config, result)
    _render_memory(result)
    if beginner:
        _render_beginner_notes(config)
    _render_warnings(result)
    console.print(
        Panel(
            Text(result.generated_config),
            title="Production Spark Submit Flags",
            border_style="cyan",
        )
    )
    if show_explain:
        _render_explanation(config, result)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config) if args.config else Settings()
        setup_logging(args.log_level or settings.log_level)
        config = resolve_config(args, settings)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red")
        return 1

    result = compute_allocation(config)

    if args.json:
        payload = {"config": config.to_dict(), "result": result.to_dict()}
        if args.explain:
            payload["explanation"] = [vars(step) for step in explain(config, result)]
        if args.beginner:
            payload["descriptions"] = describe(config)
        print(json.dumps(payload, indent=2))
    else:
        render(config, result, args.explain, args.beginner)

    if args.sink_path:
        sink = ParquetSink(args.sink_path)
        sink.save(config, result)
        logger.info("Saved plan to %s", args.sink_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
