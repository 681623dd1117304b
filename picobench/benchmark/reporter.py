"""
Report generation for benchmark results.
Supports Markdown and JSON output formats and rich console tables.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .report import Report, Row, SuiteReport
from .utils import get_machine_info, get_report_subdir_name
from ..config import Config


class Reporter:
    """
    Generate benchmark reports in various formats.

    Supports:
        - Markdown reports
        - JSON data export
        - Console output

    Reports are organized by date and hostname:
        reports/YYYYMMDD_hostname/

    Example:
        reporter = Reporter()
        reporter.generate_markdown(report, "report.md")
        reporter.generate_json(report, "results.json")
    """

    def __init__(self, output_dir: Optional[Path] = None, console: Optional[Console] = None):
        """
        Initialize reporter.

        Args:
            output_dir: Base directory for output files (default: Config.REPORT_DIR)
            console: Console used by print_summary (default: stdout)
        """
        base_dir = Path(output_dir) if output_dir else Config.REPORT_DIR

        # Subdirectory with date_hostname format, created on first write
        self.output_dir = base_dir / get_report_subdir_name()

        self.console = console or Console()

        # Cache machine info for this reporter instance
        self._machine_info = get_machine_info()

    def generate_markdown(
        self,
        report: Report,
        filename: Optional[str] = None,
    ) -> str:
        """
        Generate a Markdown benchmark report.

        Args:
            report: Report to write
            filename: Output filename (optional)

        Returns:
            Path to generated file
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        file_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if not filename:
            filename = f"benchmark_report_{file_timestamp}.md"

        output_path = self._ensure_output_dir() / filename
        machine_info = self._machine_info

        lines = []
        lines.append("# Benchmark Report")
        lines.append(f"\n**Generated:** {timestamp}")
        lines.append(f"**Seed:** {report.seed}")
        lines.append("\n---\n")

        lines.append("## Environment\n")
        lines.append("| Item | Value |")
        lines.append("|------|-------|")
        lines.append(f"| Hostname | {machine_info['hostname']} |")
        lines.append(f"| Platform | {machine_info['platform']} |")
        lines.append(f"| Machine | {machine_info['machine']} |")
        lines.append(f"| Processor | {machine_info['processor']} |")
        lines.append(f"| CPUs | {machine_info['cpu_count']} |")
        lines.append(f"| Python | {machine_info['python']} |")
        lines.append("\n---\n")

        for suite in report.suites:
            lines.append(self._format_suite_section(suite))

        content = "\n".join(lines) + "\n"

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)

        return str(output_path)

    def _format_suite_section(self, suite: SuiteReport) -> str:
        """Format a suite section for Markdown."""
        lines = []
        lines.append(f"\n## {suite.name if suite.name is not None else 'Default suite'}\n")

        if not suite.benchmarks:
            lines.append("_No benchmarks._")
            return "\n".join(lines)

        lines.append("### By workload size\n")
        lines.append("| Name | Dim | Total ms | ns/op | Baseline | Ops/second |")
        lines.append("|------|----:|---------:|------:|---------:|-----------:|")
        for row in suite.detailed_rows():
            lines.append(
                f"| {self._md_name(row)} | {row.dimension} | {row.total_ms:.3f} | "
                f"{row.ns_per_op} | {row.ratio_text} | {row.ops_per_second:.1f} |"
            )

        if suite.baseline is not None:
            lines.append("\n### Summary\n")
            lines.append("| Name | ns/op | Baseline | Ops/second |")
            lines.append("|------|------:|---------:|-----------:|")
            for row in suite.concise_rows():
                lines.append(
                    f"| {self._md_name(row)} | {row.ns_per_op} | {row.ratio_text} | "
                    f"{row.ops_per_second:.1f} |"
                )

        return "\n".join(lines)

    def _ensure_output_dir(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    @staticmethod
    def _md_name(row: Row) -> str:
        return f"**{row.name}** (baseline)" if row.is_baseline else row.name

    def generate_json(
        self,
        report: Report,
        filename: Optional[str] = None,
    ) -> str:
        """
        Generate JSON benchmark results.

        Args:
            report: Report to export
            filename: Output filename (optional)

        Returns:
            Path to generated file
        """
        file_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if not filename:
            filename = f"benchmark_results_{file_timestamp}.json"

        output_path = self._ensure_output_dir() / filename

        data = {
            "generated_at": datetime.now().isoformat(),
            "test_environment": dict(self._machine_info),
            **report.to_dict(),
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        return str(output_path)

    def print_summary(self, report: Report, concise: bool = True, detailed: bool = True) -> None:
        """Print report tables to the console."""
        for suite in report.suites:
            title = suite.name if suite.name is not None else "Benchmarks"

            if detailed:
                self.console.print(self._detailed_table(title, suite.detailed_rows()))
            if concise and suite.benchmarks:
                self.console.print(self._concise_table(title, suite.concise_rows()))

        self.console.print(f"Seed: [cyan]{report.seed}[/cyan]")

    def _detailed_table(self, title: str, rows: List[Row]) -> Table:
        table = Table(title=title)
        table.add_column("Name (baseline is *)", style="cyan")
        table.add_column("Dim", justify="right")
        table.add_column("Total ms", justify="right")
        table.add_column("ns/op", justify="right")
        table.add_column("Baseline", justify="right")
        table.add_column("Ops/second", justify="right")

        for row in rows:
            table.add_row(
                row.name_text,
                str(row.dimension),
                f"{row.total_ms:.3f}",
                str(row.ns_per_op),
                row.ratio_text,
                f"{row.ops_per_second:.1f}",
            )
        return table

    def _concise_table(self, title: str, rows: List[Row]) -> Table:
        table = Table(title=f"{title} (summary)")
        table.add_column("Name (baseline is *)", style="cyan")
        table.add_column("ns/op", justify="right")
        table.add_column("Baseline", justify="right")
        table.add_column("Ops/second", justify="right")

        for row in rows:
            style = "bold" if row.is_baseline else None
            table.add_row(
                row.name_text,
                str(row.ns_per_op),
                row.ratio_text,
                f"{row.ops_per_second:.1f}",
                style=style,
            )
        return table
