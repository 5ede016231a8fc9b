"""Command-line entry point."""

from __future__ import annotations

import logging
import sys

import click

from mateboard import __version__
from mateboard.config import Settings
from mateboard.core.board import render
from mateboard.puzzles import PuzzleFormatError, PuzzleStore, load_puzzles
from mateboard.validation import (
    BatchValidationReport,
    PuzzleValidationResult,
    run_self_test,
    validate_puzzle,
    validate_puzzles,
)

EXIT_OK = 0
EXIT_CONTENT_FAILURES = 1
EXIT_SELF_TEST_FAILED = 2

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _load_store(path: str) -> PuzzleStore:
    try:
        return PuzzleStore(load_puzzles(path))
    except PuzzleFormatError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_result(result: PuzzleValidationResult, verbose: bool) -> None:
    mark = "PASS" if result.passed else "FAIL"
    if result.passed and not verbose:
        return
    click.echo(f"{mark} {result.puzzle_id}")
    for error in result.errors:
        click.echo(f"  - {error}")
    if verbose:
        for warning in result.warnings:
            click.echo(f"  ! {warning}")
    if result.failing_move_index is not None:
        click.echo(f"  failing move {result.failing_move_index}: {result.failing_move}")


def _exit_code(report: BatchValidationReport) -> int:
    if not report.trusted:
        return EXIT_SELF_TEST_FAILED
    if report.failed_puzzles:
        return EXIT_CONTENT_FAILURES
    return EXIT_OK


@click.group()
@click.version_option(version=__version__, prog_name="mateboard")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: $MATEBOARD_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Rules engine and solution validator for small-board mate puzzles."""
    settings = Settings.from_env()
    if log_level is not None:
        settings = Settings(
            log_level=log_level,
            dev_mode=settings.dev_mode,
            run_self_test=settings.run_self_test,
            verbose=settings.verbose,
        )
    _configure_logging(settings)
    ctx.obj = settings


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--self-test/--no-self-test",
    default=None,
    help="Run the move-generator self-test before validating.",
)
@click.option("-v", "--verbose", is_flag=True, help="Also list passing puzzles.")
@click.pass_obj
def validate(
    settings: Settings, path: str, self_test: bool | None, verbose: bool
) -> None:
    """Replay every puzzle in PATH and certify its mate line."""
    store = _load_store(path)
    run_check = settings.run_self_test if self_test is None else self_test
    report = validate_puzzles(store, run_self_test=run_check)

    if not report.self_test.passed:
        click.echo("SELF-TEST FAILED: the move generator is broken", err=True)
        for error in report.self_test.errors:
            click.echo(f"  - {error}", err=True)

    for result in report.results:
        _echo_result(result, verbose or settings.verbose)

    click.echo(f"Passed {report.passed_puzzles}/{report.total_puzzles} puzzles")
    sys.exit(_exit_code(report))


@cli.command("selftest")
def selftest_command() -> None:
    """Run only the move-generator self-test."""
    result = run_self_test()
    if result.passed:
        click.echo("Self-test passed")
        return
    for error in result.errors:
        click.echo(f"  - {error}", err=True)
    click.echo("Self-test FAILED", err=True)
    sys.exit(EXIT_SELF_TEST_FAILED)


@cli.command("list")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--size", type=int, default=None)
@click.option("--difficulty", type=int, default=None)
@click.option("--pack", default=None)
@click.option(
    "--dev-mode/--no-dev-mode",
    default=None,
    help="Hide puzzles that fail validation.",
)
@click.pass_obj
def list_command(
    settings: Settings,
    path: str,
    size: int | None,
    difficulty: int | None,
    pack: str | None,
    dev_mode: bool | None,
) -> None:
    """List puzzles in PATH matching the filters."""
    store = _load_store(path)
    dev = settings.dev_mode if dev_mode is None else dev_mode
    playable = {p.id for p in store.playable(dev_mode=dev)}
    for puzzle in store.filter(size=size, difficulty=difficulty, pack=pack):
        if puzzle.id not in playable:
            continue
        click.echo(
            f"{puzzle.id}\t{puzzle.size}x{puzzle.size}\t"
            f"d{puzzle.difficulty}\t{puzzle.pack}\t{puzzle.title}"
        )


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("puzzle_id")
def show(path: str, puzzle_id: str) -> None:
    """Print the starting position, solution line and verdict of one puzzle."""
    store = _load_store(path)
    puzzle = store.get(puzzle_id)
    if puzzle is None:
        raise click.ClickException(f"No puzzle with id {puzzle_id!r}")

    click.echo(
        f"{puzzle.id}: {puzzle.title} ({puzzle.pack}, difficulty {puzzle.difficulty})"
    )
    click.echo(f"{puzzle.side_to_move} to move, mate in {puzzle.objective.depth}")
    click.echo(render(puzzle.pieces, puzzle.size))
    for index, line_move in enumerate(puzzle.line):
        click.echo(f"  {index}. {line_move.color}: {line_move.move}")
    _echo_result(validate_puzzle(puzzle), verbose=True)


def main() -> None:
    """Launch the mateboard command line."""
    cli(prog_name="mateboard")


if __name__ == "__main__":
    main()
