"""Output formatting for Lexis CLI commands."""

from __future__ import annotations

from pathlib import Path

from lexis_translate import TranslateFilter
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from lexis.pipeline import Pipeline, PipelineConfig, RunSummary

console = Console(stderr=True)


class OutputFormatter:
    """Handles formatting CLI output for different commands.

    Everything is written to stderr; stdout carries records only.
    """

    def show_startup_banner(
        self, pipeline_path: Path, workers: int, log_level: str
    ) -> None:
        """Display the run command banner."""
        console.print(
            Panel(
                f"Pipeline: [bold]{pipeline_path}[/bold]\n"
                f"Workers: {workers}\n"
                f"Log level: {log_level}",
                title="🔤 Lexis",
                border_style="blue",
            )
        )

    def format_pipeline(self, config: PipelineConfig, pipeline: Pipeline) -> None:
        """Display the filters of a validated pipeline as a table."""
        table = Table(title=f"Pipeline '{config.name}'")
        table.add_column("Filter", style="cyan")
        table.add_column("Type")
        table.add_column("Source → Target")
        table.add_column("Dictionary")
        table.add_column("Mode")
        table.add_column("Entries", justify="right")

        for name, pipeline_filter in pipeline.filters:
            if isinstance(pipeline_filter, TranslateFilter):
                filter_config = pipeline_filter.config
                store = pipeline_filter.store
                dictionary = (
                    str(filter_config.dictionary_path)
                    if filter_config.dictionary_path is not None
                    else "inline"
                )
                table.add_row(
                    name,
                    pipeline_filter.get_name(),
                    f"{filter_config.source} → {filter_config.target}",
                    dictionary,
                    store.mode.value,
                    str(len(store)),
                )
            else:
                table.add_row(name, pipeline_filter.get_name(), "", "", "", "")

        console.print(table)
        console.print("[green]✅ Pipeline is valid[/green]")

    def show_run_summary(self, summary: RunSummary) -> None:
        """Display the counters of a finished run."""
        table = Table(title="Run summary")
        table.add_column("Filter", style="cyan")
        table.add_column("Matched", justify="right")
        for name, count in summary.matched.items():
            table.add_row(name, str(count))
        console.print(table)
        console.print(
            f"[green]✅ Processed {summary.records} records[/green]"
            + (
                f" [yellow]({summary.skipped_lines} lines skipped)[/yellow]"
                if summary.skipped_lines
                else ""
            )
        )
