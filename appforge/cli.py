"""
appforge CLI: the interface

    appforge APP_PATH [options]

Shows what will be done, asks for confirmation (unless -y), runs the
pipeline and, by default, starts the app server in the new app.

Exit codes:
  0   success
  1   an external command failed, or output pipe closed
  64  usage error (bad arguments, bad configuration)
  78  any other pipeline failure
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional, Sequence

import click
import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from appforge import __tagline__, __version__
from appforge.config_loader import AppConfig, load_config
from appforge.environment import cleaned_environ
from appforge.errors import ExecutionError, UsageError
from appforge.generator import Generator
from appforge.runner import log_command

app = typer.Typer(
    name="appforge",
    help=f"appforge: {__tagline__}",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"appforge v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@app.command()
def create(
    app_path: Path = typer.Argument(..., metavar="APP_PATH", help="Where to create the new app"),
    auto_confirm: bool = typer.Option(False, "-y", help="Auto-confirm all prompts"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
    simple_form: Optional[bool] = typer.Option(
        None, "--simple-form/--no-simple-form", help="Use simple_form (default: false)"
    ),
    install_gem_bundler_rails: Optional[bool] = typer.Option(
        None,
        "--install-gem-bundler-rails/--no-install-gem-bundler-rails",
        help="Run `gem update --system` and `gem install bundler rails` (default: true)",
    ),
    start_server: Optional[bool] = typer.Option(
        None, "--start-server/--no-start-server", help="Start the app server (default: true)"
    ),
    database: Optional[str] = typer.Option(
        None, "--database", "-d", help="postgresql, mysql or sqlite3 (default: postgresql)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="YAML overrides (default: ~/.appforge/config.yaml)"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Print the version",
    ),
):
    """Create a new Rails app with a Thredded forum at APP_PATH."""
    config = load_config(
        config_file,
        app_path=app_path,
        verbose=verbose or None,
        auto_confirm=auto_confirm or None,
        simple_form=simple_form,
        install_gem_bundler_rails=install_gem_bundler_rails,
        start_server=start_server,
        database=database,
    )
    _configure_logging(config.verbose)
    generator = Generator(config)

    console.print("[bold]Will do the following:[/]")
    console.print(escape(generator.summary()), highlight=False)
    if not (config.auto_confirm or Confirm.ask("[bold bright_yellow]Proceed?[/]")):
        raise typer.Exit()

    generator.generate()
    console.print("\n[bold bright_green]All done! 🌟[/]")

    if config.start_server:
        _start_app_server(config)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _start_app_server(config: AppConfig) -> None:
    """Replace this process with `rails s` running inside the new app."""
    logger.info("Changing directory and starting the app server")
    args = ["bundle", "exec", "rails", "s"]
    log_command(args)
    os.chdir(config.app_path)
    os.execvpe(args[0], args, cleaned_environ(os.environ, config.clean_env))


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    if verbose:
        logger.add(
            lambda msg: console.print(f"[dim]{escape(str(msg))}[/]", end="", highlight=False),
            level="DEBUG",
            format="{time:HH:mm:ss} | {level:<7} | {message}",
        )
    else:
        logger.add(
            lambda msg: console.print(escape(str(msg)), end="", highlight=False),
            level="INFO",
            format="{message}",
        )


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and map the outcome to an exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        args = ["--help"]

    try:
        result = app(args=args, prog_name="appforge", standalone_mode=False)
    except click.UsageError as e:
        e.show()
        return UsageError.exit_code
    except UsageError as e:
        console.print(f"[red]{escape(str(e))}[/]", highlight=False)
        return e.exit_code
    except ExecutionError as e:
        console.print(f"[red]{escape(str(e))}[/]", highlight=False)
        logger.opt(exception=e).debug("Failure detail")
        return e.exit_code
    except BrokenPipeError:
        return 1
    except SystemExit as e:
        # click exits directly on EPIPE, even outside standalone mode
        return e.code if isinstance(e.code, int) else 1
    except click.exceptions.Abort:
        console.print("[yellow]Aborted.[/]")
        return 1

    return result if isinstance(result, int) else 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
