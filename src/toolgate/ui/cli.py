from __future__ import annotations

import sys

from dotenv import load_dotenv
from loguru import logger
import typer

from toolgate.core.config import GateConfig, load_gate_config_from_env
from toolgate.core.safety.classifier import CommandClassifier
from toolgate.core.safety.errors import EmptyCommandError, ForbiddenCommandError
from toolgate.core.safety.path_analysis import assess_path
from toolgate.core.safety.validator import SafetyValidator

# Load environment variables from .env
load_dotenv()

app = typer.Typer(
    help="toolgate: command safety gate for agent tool calls.",
    no_args_is_help=True,
)


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} [{level}] {name}: {message}",
        level=level,
    )


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Load configuration and set up logging before any command runs."""
    try:
        config = load_gate_config_from_env()
    except ValueError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(1) from None
    configure_logging(config.log_level)
    ctx.obj = config


def _workspace(ctx: typer.Context, workspace: str | None) -> str:
    if workspace:
        return workspace
    config: GateConfig = ctx.obj
    return config.workspace_root


@app.command("classify")
def classify(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="Shell command line to classify"),
    workspace: str | None = typer.Option(
        None, help="Workspace root (defaults to TOOLGATE_WORKSPACE_ROOT or cwd)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print reasons"),
) -> None:
    """Print the safety tier (GREEN, YELLOW or RED) for a command."""
    classifier = CommandClassifier(workspace_root=_workspace(ctx, workspace))
    verdict = classifier.classify_verdict(command)
    typer.echo(verdict.tier.value)
    if verbose:
        for reason in verdict.reasons:
            typer.echo(f"  - {reason}")


@app.command("validate")
def validate(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="Shell command line to validate"),
    workspace: str | None = typer.Option(
        None, help="Workspace root (defaults to TOOLGATE_WORKSPACE_ROOT or cwd)"
    ),
) -> None:
    """Report whether a command needs approval; exits 2 when it is forbidden."""
    validator = SafetyValidator(
        classifier=CommandClassifier(workspace_root=_workspace(ctx, workspace))
    )
    try:
        required = validator.validate(command)
    except EmptyCommandError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    except ForbiddenCommandError as e:
        typer.echo(f"forbidden: {e}", err=True)
        for reason in e.reasons:
            typer.echo(f"  - {reason}", err=True)
        raise typer.Exit(2) from None

    typer.echo("approval required" if required else "auto-approved")


@app.command("check-path")
def check_path(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Path-like argument to analyze"),
    workspace: str | None = typer.Option(
        None, help="Workspace root (defaults to TOOLGATE_WORKSPACE_ROOT or cwd)"
    ),
) -> None:
    """Print the path risk tier and the rule category that decided it."""
    risk = assess_path(path, workspace_root=_workspace(ctx, workspace))
    line = f"{risk.tier.value} {risk.category}"
    if risk.reason:
        line += f" ({risk.reason})"
    typer.echo(line)


if __name__ == "__main__":
    app()
