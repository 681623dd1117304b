#!/usr/bin/env python3
"""
picobench - CLI Entry Point

Usage:
    python main.py run benchmarks/ --seed 42
    python main.py run bench_sort.py --iters 100,1000 --samples 3 -f all
    python main.py list benchmarks/
    python main.py create-sample -o bench_sample.py
"""

import sys
import logging
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import click
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, BarColumn, MofNCompleteColumn, TextColumn

from picobench import __version__
from picobench.config import Config
from picobench.exceptions import PicobenchError
from picobench.loader import BenchmarkLoader
from picobench.benchmark.registry import Registry
from picobench.benchmark.runner import BenchmarkRunner, RunnerConfig
from picobench.benchmark.reporter import Reporter

logger = logging.getLogger(__name__)

console = Console()

TEXT_FORMATS = ('text', 'concise', 'both', 'table', 'md', 'json', 'all')

SAMPLE_BENCHMARK = '''"""
Sample picobench benchmarks.

Run with:
    python main.py run {filename}
"""

from collections import deque

from picobench import scope


def bench_list_append(state):
    items = []
    for _ in state:
        items.append(1)


def bench_deque_append(state):
    items = deque()
    for _ in state:
        items.append(1)


def bench_sorted(state):
    data = list(range(state.iterations, 0, -1))
    with scope(state):
        sorted(data)


def register_benchmarks(registry):
    registry.declare_suite("append")
    registry.register_benchmark("list", bench_list_append).baseline()
    registry.register_benchmark("deque", bench_deque_append)

    registry.declare_suite("sort")
    registry.register_benchmark("sorted", bench_sorted).iterations([100, 1000, 10000]).samples(3)
'''


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )

    # Also set level for our modules
    logging.getLogger('picobench').setLevel(level)


def _load_registry(paths) -> Registry:
    """Load benchmark files into a fresh registry, exiting on failure."""
    registry = Registry()
    loader = BenchmarkLoader(registry)

    for path in paths:
        try:
            loader.load(path)
        except FileNotFoundError as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)
        except PicobenchError as e:
            console.print(f"[red]Error: {e.message}[/red]")
            sys.exit(1)

    return registry


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output (INFO level)')
@click.option('--debug', is_flag=True, help='Enable debug output (DEBUG level)')
@click.pass_context
def cli(ctx, verbose, debug):
    """
    picobench

    Register benchmarks in plain Python files, run them in a randomly
    interleaved order and compare them against a baseline.

    Use -v for verbose output, --debug for detailed logs.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['debug'] = debug
    setup_logging(verbose, debug)


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.option('--seed', '-s', default=None, type=int, help='Seed for the run order (negative = random)')
@click.option('--iters', '-i', default=None, help='Default workload sizes, e.g. 8,64,512')
@click.option('--samples', '-n', default=None, type=int, help='Default samples per workload size')
@click.option('--suite', 'suites', multiple=True, help='Only run this suite (repeatable)')
@click.option('--format', '-f', 'fmt', type=click.Choice(TEXT_FORMATS), default='both', help='Output format')
@click.option('--output', '-o', default=None, help='Write text output to this file instead of stdout')
def run(paths, seed, iters, samples, suites, fmt, output):
    """
    Run benchmarks from files or directories.

    Example:
        python main.py run benchmarks/ -s 42 -i 100,1000 -n 3
    """
    try:
        iterations = Config.parse_iterations(iters) if iters else Config.default_iterations()
    except ValueError as e:
        console.print(f"[red]Error: invalid --iters: {e}[/red]")
        sys.exit(1)

    if samples is not None and samples <= 0:
        console.print("[red]Error: --samples must be positive[/red]")
        sys.exit(1)

    try:
        samples = samples or Config.default_samples()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    registry = _load_registry(paths)
    if not len(registry):
        console.print("[yellow]⚠️  No benchmarks found.[/yellow]")

    config = RunnerConfig(
        iterations=iterations,
        samples=samples,
        suites=list(suites) or None,
    )
    runner = BenchmarkRunner(registry, config)

    if seed is None:
        seed = Config.SEED

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Running benchmarks...", total=None)
        runner.on_progress(lambda completed, total: progress.update(task, completed=completed, total=total))

        try:
            report = runner.run(seed=seed)
        except Exception as e:
            logger.debug("Benchmark run aborted", exc_info=True)
            console.print(f"[red]Benchmark run aborted: {type(e).__name__}: {e}[/red]")
            sys.exit(1)

    # Plain text output
    if fmt in ('text', 'concise', 'both', 'all'):
        sink = open(output, "w", encoding="utf-8") if output else sys.stdout
        try:
            if fmt in ('text', 'both', 'all'):
                report.render_detailed(sink)
            if fmt in ('concise', 'both', 'all'):
                report.render_concise(sink)
        finally:
            if output:
                sink.close()

        if output:
            console.print(f"📄 Text report: [green]{output}[/green]")

    if fmt == 'table':
        Reporter(console=console).print_summary(report)

    # Report files
    if fmt in ('md', 'json', 'all'):
        Config.ensure_directories()
        reporter = Reporter(console=console)

        if fmt in ('md', 'all'):
            md_path = reporter.generate_markdown(report)
            console.print(f"📄 Markdown report: [green]{md_path}[/green]")

        if fmt in ('json', 'all'):
            json_path = reporter.generate_json(report)
            console.print(f"📊 JSON results: [green]{json_path}[/green]")

    console.print(f"Seed: [cyan]{report.seed}[/cyan]")


@cli.command('list')
@click.argument('paths', nargs=-1, required=True)
def list_benchmarks(paths):
    """List registered suites and benchmarks."""
    registry = _load_registry(paths)

    table = Table(title="Registered Benchmarks")
    table.add_column("Suite", style="cyan")
    table.add_column("Benchmark")
    table.add_column("Baseline")
    table.add_column("Iterations")
    table.add_column("Samples", justify="right")

    for suite in registry.suites:
        for bm in suite.benchmarks:
            table.add_row(
                suite.name if suite.name is not None else "-",
                bm.name,
                "✅" if bm.is_baseline else "",
                ",".join(str(i) for i in bm.state_iterations) or "default",
                str(bm.sample_count) if bm.sample_count else "default",
            )

    console.print(table)
    console.print(f"\n{len(registry)} benchmarks in {len(registry.suites)} suites")


@cli.command('create-sample')
@click.option('--output', '-o', default='bench_sample.py', help='Output filename')
def create_sample(output):
    """Create a sample benchmark file."""
    path = Path(output)
    if path.exists():
        console.print(f"[red]Error: {output} already exists[/red]")
        sys.exit(1)

    path.write_text(SAMPLE_BENCHMARK.format(filename=path.name), encoding="utf-8")
    console.print(f"[green]✅ Sample benchmarks created: {output}[/green]")
    console.print(f"\nRun them with: python main.py run {output}")


if __name__ == "__main__":
    cli()
