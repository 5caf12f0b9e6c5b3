"""Main CLI application entry point.

Defines the Typer application, its options, the confirmation gate and
the mapping of failures to exit codes.
"""

import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.logging import RichHandler
from typer._click.exceptions import NoSuchOption, UsageError
from typer.core import TyperCommand

from vmscrub import __version__
from vmscrub.cli.display import print_completion, print_start, print_warning_banner
from vmscrub.config import CleanupConfig, ConfigError, load_config
from vmscrub.core.runner import ActionRunner, CommandFailedError
from vmscrub.core.stages import CleanupPlan
from vmscrub.scanners.errors import QueryError
from vmscrub.utils.formatting import console, err_console, print_error, use_colors

logger = logging.getLogger(__name__)

# Exit code for unknown options and stray arguments (click convention)
USAGE_ERROR = 2

# The only reply that lets the cleanup proceed
CONFIRMATION_WORD = "yes"


class CleanupCommand(TyperCommand):
    """Command class reporting unrecognized arguments as unknown options.

    Help anywhere on the command line wins over everything else, including
    arguments that would otherwise be rejected.
    """

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        help_flags = [arg for arg in args if arg in ctx.help_option_names]
        if help_flags:
            return super().parse_args(ctx, help_flags[:1])

        # Collect stray tokens ourselves so they get the same notice as options
        ctx.allow_extra_args = True
        try:
            extra = super().parse_args(ctx, args)
        except NoSuchOption as e:
            self._reject(ctx, f"Unknown option: {e.option_name}")
        except UsageError as e:
            self._reject(ctx, e.format_message())
        if extra:
            self._reject(ctx, f"Unknown option: {extra[0]}")
        return extra

    def _reject(self, ctx: typer.Context, message: str) -> NoReturn:
        print_error(message)
        err_console.print(ctx.get_usage(), markup=False, highlight=False)
        err_console.print(f"Try '{ctx.command_path} --help' for help.", markup=False)
        raise typer.Exit(code=USAGE_ERROR)


app = typer.Typer(
    name="vmscrub",
    help="Deep-clean a cloud VM, leaving only a minimal Ubuntu install.",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"vmscrub version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: If True, log at DEBUG level, otherwise WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
    if verbose:
        logger.debug("Verbose logging enabled")


def confirm_cleanup() -> bool:
    """Show the warning banner and read the operator's reply.

    Returns:
        True only if the reply line is exactly "yes".
    """
    print_warning_banner()
    try:
        reply = console.input()
    except EOFError:
        return False
    return reply == CONFIRMATION_WORD


def run_cleanup(config: CleanupConfig, dry_run: bool) -> None:
    """Run all cleanup stages and print the completion report.

    Args:
        config: Settings of the run.
        dry_run: If True, report actions without executing them.

    Raises:
        CommandFailedError: If a non-tolerated command fails.
        QueryError: If a fatal system query fails.
    """
    runner = ActionRunner(dry_run=dry_run, timeout=config.command_timeout)
    plan = CleanupPlan(runner, config)

    print_start()
    plan.run()
    print_completion(dry_run)


@app.command(cls=CleanupCommand)
def main(
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show actions without making changes.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: $VMSCRUB_CONFIG or /etc/vmscrub/config.toml).",
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Deep-clean a cloud VM, leaving only a minimal Ubuntu install.

    Removes every non-base package, all non-root users and their data,
    logs, temp files and the systemd journal. This cannot be undone.

    Examples:
        sudo vmscrub          # run interactively
        sudo vmscrub -n       # dry-run
        sudo vmscrub -y       # auto-yes
    """
    configure_logging(verbose)

    try:
        config = load_config(config_path)
        with use_colors(config.colors):
            if not yes and not confirm_cleanup():
                console.print("Aborted.")
                raise typer.Exit(code=1)

            run_cleanup(config, dry_run)
    except KeyboardInterrupt as e:
        console.print("\nInterrupted. Exiting.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except CommandFailedError as e:
        # The failing tool already printed its own diagnostics
        logger.debug("Stopping: %s", e)
        raise typer.Exit(code=e.exit_code) from e
    except QueryError as e:
        print_error(str(e))
        raise typer.Exit(code=e.returncode or 1) from e


if __name__ == "__main__":
    app()
