"""Command-line interface for trying out timed operations."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from .config import Config, load_config, set_config
from .sinks import StructlogSink
from .utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="elapsed-time",
    help="Timed logging operations that record elapsed time and outcome.",
    no_args_is_help=True,
)

console = Console()


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
) -> tuple[Config, Any]:
    """Load configuration and configure logging for a command.

    Command-line options override the loaded configuration.
    """
    config = load_config(config_path)
    set_config(config)

    configure_logging(
        log_level or config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs if json_logs is None else json_logs,
    )
    return config, get_logger("elapsed_time.cli")


class Example:
    """Runs each kind of operation once against a sink."""

    def __init__(self, sink: StructlogSink, logger: Any, delay: float, config: Config):
        self.sink = sink
        self.logger = logger
        self.delay = delay
        self.config = config

    def plain_log(self) -> None:
        self.logger.info("Operation1: StandardLog")

    def timed(self) -> None:
        with self.sink.time_operation("Operation{Number}", 2):
            time.sleep(self.delay)

    def begin_and_complete(self) -> None:
        with self.sink.begin_operation("Operation{Number}", 3) as operation:
            time.sleep(self.delay)
            operation.complete()

    def begin_and_abandon(self) -> None:
        with self.sink.begin_operation("Operation{Number}", 4) as operation:
            time.sleep(self.delay)
            operation.abandon()

    def begin_and_cancel(self) -> None:
        with self.sink.begin_operation("Operation{Number}", 5) as operation:
            time.sleep(self.delay)
            operation.cancel()

    def failing(self) -> None:
        with self.sink.begin_operation("Operation{Number}", 6) as operation:
            try:
                time.sleep(self.delay)
                raise RuntimeError("simulated failure")
            except RuntimeError as e:
                operation.set_exception(e)
                self.logger.debug("demo_failure_handled", operation=6)

    def levelled(self) -> None:
        levelled = self.sink.operation_at(
            self.config.completion_level_no, self.config.abandonment_level_no
        )
        with levelled.time("Operation{Number}", 7, demo="levelled"):
            time.sleep(self.delay)

    def run_all(self) -> int:
        steps = [
            self.plain_log,
            self.timed,
            self.begin_and_complete,
            self.begin_and_abandon,
            self.begin_and_cancel,
            self.failing,
            self.levelled,
        ]
        for step in steps:
            step()
        return len(steps)


@app.command()
def demo(
    delay: Annotated[
        float,
        typer.Option("--delay", min=0.0, help="Seconds of simulated work per operation"),
    ] = 1.0,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to elapsed-time.yaml", exists=True),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
    ] = None,
    json_logs: Annotated[
        bool | None,
        typer.Option("--json/--no-json", help="Render console logs as JSON"),
    ] = None,
) -> None:
    """Run every kind of timed operation once."""
    config, logger = get_config_and_logger(config_path, log_level, json_logs)
    logger.info("demo_started", delay=delay)

    sink = StructlogSink(get_logger("elapsed_time.demo"))
    count = Example(sink, logger, delay, config).run_all()

    logger.info("demo_finished", steps=count)


@app.command(name="show-config")
def show_config(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Path to elapsed-time.yaml", exists=True),
    ] = None,
) -> None:
    """Show the effective configuration."""
    config = load_config(config_path)

    table = Table(title="elapsed-time configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for name, value in config.model_dump().items():
        table.add_row(name, "" if value is None else str(value))

    console.print(table)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
