"""Main entry point for the gen CLI."""

if __name__ == "__main__" and __package__ is None:
    import sys
    from pathlib import Path

    # Add the project root to the Python path
    project_root = Path(__file__).resolve().parent.parent
    sys.path.insert(0, str(project_root))
    __package__ = "gencli"


import asyncio
from typing import List, Optional

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from gencli.cache import CommandCache
from gencli.config import ConfigStore, GenSettings, load_settings
from gencli.orchestrator import GenOrchestrator
from gencli.process import ProcessRunner
from gencli.providers import ProviderState, create_providers
from gencli.ui import configure_output, console, err_console, setup_logging

# Initialize Typer app with rich formatting
app = typer.Typer(
    name="gen",
    help="Gen - Generate shell commands from natural language using AI CLIs",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=False,
    context_settings={
        "help_option_names": ["-h", "--help"],
        # `gen provider -list` and stray flags arrive as plain words
        "ignore_unknown_options": True,
        "allow_interspersed_args": True,
    },
)

LIST_ACTIONS = ("-list", "--list", "list")
SET_ACTIONS = ("-set", "--set", "set")

STATUS_ICONS = {
    ProviderState.READY: "✅",
    ProviderState.NOT_AUTHENTICATED: "⚠️",
}

USAGE_TEXT = """
# Gen - shell commands from natural language

## Usage
```bash
gen "list all directories in current folder"
gen "find files larger than 100MB" -p gemini
gen "compress these logs" -c "logs live in ./var"
gen provider -list
gen provider -set claude
gen provider -set auto
```

## Options
- `-p, --provider <name>`  Use a specific provider for this command
- `-c, --context <text>`   Extra context for the request
- `-d, --debug`            Show debug output and error details
- `-q, --quiet`            Do not show the progress spinner
- `-h, --help`             Show this help message

## Provider commands
- `provider -list`         List providers and their status
- `provider -set <name>`   Set preferred provider (or `auto`)
"""


def show_usage(rich_output: bool = True):
    """Display usage instructions."""
    if not rich_output:
        err_console.print(USAGE_TEXT.strip(), markup=False, highlight=False)
        return

    err_console.print(
        Panel(
            Markdown(USAGE_TEXT),
            title="[bold blue]Gen[/bold blue]",
            border_style="blue",
        )
    )


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        from . import __version__

        console.print(f"Gen version {__version__}")
        raise typer.Exit()


def show_config_callback(value: bool):
    """Show current configuration and exit."""
    if value:
        try:
            settings = load_settings()
            store = ConfigStore(settings.config_path)
            cache = CommandCache(settings.cache_path, enabled=settings.cache_enabled)

            console.print("\n[bold blue]Gen Configuration[/bold blue]")
            console.print(
                f"Provider: [cyan]{store.get_provider() or 'auto-detect'}[/cyan]"
            )
            console.print(f"Config directory: [dim]{settings.config_dir}[/dim]")
            console.print(
                f"Cache: [cyan]{'Enabled' if settings.cache_enabled else 'Disabled'}[/cyan]"
                f" ({len(cache)} entries)"
            )
            if settings.provider_timeout:
                console.print(f"Timeout override: [cyan]{settings.provider_timeout}s[/cyan]")
            console.print(f"Log level: [cyan]{settings.log_level.value}[/cyan]")
            console.print(
                f"Rich output: [cyan]{'Yes' if settings.rich_output else 'No'}[/cyan]"
            )

        except Exception as e:
            err_console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
            raise typer.Exit(1)
        raise typer.Exit()


def build_orchestrator(settings: GenSettings) -> GenOrchestrator:
    """Wire the provider table, cache and preference store together."""
    cache = CommandCache(settings.cache_path, enabled=settings.cache_enabled)
    providers = create_providers(
        ProcessRunner(), cache, timeout_override=settings.provider_timeout
    )
    return GenOrchestrator(providers, ConfigStore(settings.config_path))


def is_provider_mode(words: List[str]) -> bool:
    """True for `provider -list` or `provider -set ...`, not a message about providers."""
    return (
        len(words) >= 2
        and words[0] == "provider"
        and words[1] in LIST_ACTIONS + SET_ACTIONS
    )


def split_flags(words: List[str]) -> List[str]:
    """Drop unrecognised flags from ``words``, warning about each one."""
    kept = []
    for word in words:
        if word.startswith("-") and len(word) > 1:
            err_console.print(f"[yellow]Warning: Unknown option '{escape(word)}'[/yellow]")
            continue
        kept.append(word)
    return kept


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    query: List[str] = typer.Argument(
        None, help="Natural language description of the command you want."
    ),
    provider: Optional[str] = typer.Option(
        None, "--provider", "-p", help="Use a specific provider for this command"
    ),
    context: str = typer.Option(
        "", "--context", "-c", help="Extra context passed along with the request"
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug output and detailed error information",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Do not show the progress spinner"
    ),
    settings_file: Optional[str] = typer.Option(
        None, "--settings", help="Path to a custom settings.toml"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit.",
    ),
    show_config: Optional[bool] = typer.Option(
        None,
        "--show-config",
        callback=show_config_callback,
        is_eager=True,
        help="Show current configuration and exit.",
    ),
):
    """Generate a shell command from a natural language request."""
    words = list(query or [])
    show_debug = debug

    try:
        settings = load_settings(settings_file=settings_file, debug=debug)
        show_debug = settings.show_debug
        setup_logging(settings.log_level.value)
        configure_output(settings.rich_output)

        if is_provider_mode(words):
            ok = execute_provider_mode(words[1:], settings)
        else:
            message = " ".join(split_flags(words)).strip()
            if not message:
                show_usage(settings.rich_output)
                ok = False
            else:
                command = asyncio.run(
                    execute_generation(message, settings, context, provider, quiet)
                )
                display_command(command)
                ok = True
    except Exception as e:
        handle_error(e, show_debug)
        ok = False

    if not ok:
        raise typer.Exit(1)


def execute_provider_mode(args: List[str], settings: GenSettings) -> bool:
    """Handle `gen provider -list` and `gen provider -set <name>`."""
    action = args[0] if args else ""

    if action in LIST_ACTIONS:
        orchestrator = build_orchestrator(settings)
        asyncio.run(list_providers(orchestrator))
        return True

    if action in SET_ACTIONS:
        if len(args) < 2:
            err_console.print("Usage: gen provider -set <name|auto>")
            return False
        orchestrator = build_orchestrator(settings)
        selected = orchestrator.set_provider(args[1])
        if selected is None:
            console.print("Provider set to auto-detect")
        else:
            console.print(f"Provider set to: {selected}")
        return True

    show_usage(settings.rich_output)
    return False


async def list_providers(orchestrator: GenOrchestrator):
    """Print every user-facing provider with its status."""
    current = orchestrator.current_provider()
    console.print("Available providers:")

    for provider, status in await orchestrator.list_providers():
        icon = STATUS_ICONS.get(status.state, "❌")
        marker = " (current)" if current == provider.name else ""
        console.print(
            f"  {icon} {provider.name}{marker} - {escape(status.describe())}",
            highlight=False,
        )

    if not current:
        console.print("\nNo provider set (auto-detect mode)")


async def execute_generation(
    message: str,
    settings: GenSettings,
    context: str = "",
    provider: Optional[str] = None,
    quiet: bool = False,
) -> str:
    """Resolve a provider and generate the command."""
    orchestrator = build_orchestrator(settings)
    if quiet:
        return await orchestrator.generate_command(message, context, provider)

    with err_console.status("[dim]Generating command...[/dim]"):
        return await orchestrator.generate_command(message, context, provider)


def display_command(command: str):
    """Print the generated command alone on stdout."""
    console.print(command, markup=False, highlight=False, soft_wrap=True)


def handle_error(error: Exception, debug: bool = False):
    """Handle and display errors with appropriate formatting."""
    if debug:
        err_console.print("\n[bold red]Debug Error Details:[/bold red]")
        err_console.print_exception()
    else:
        err_console.print(f"[bold red]❌ Error:[/bold red] {escape(str(error))}")


if __name__ == "__main__":
    app()
