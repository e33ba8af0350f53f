"""
Configuration commands.

Loaded only when `transrpc settings` is used.
"""

from rich.console import Console
from rich.table import Table

from transrpc.core.configs import CONFIG_PATH, get_client_config, load_raw_config

console = Console()


def handle_config(action: str) -> None:
    """
    Route to appropriate config action.

    Args:
        action: Currently only 'show'
    """
    actions = {
        "show": show_config,
    }

    if action not in actions:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Available actions: show")
        raise SystemExit(1)

    actions[action]()


def show_config() -> None:
    """Display the resolved configuration with the password masked."""
    try:
        config = get_client_config(load_raw_config())
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"Config file: {CONFIG_PATH}")
        raise SystemExit(1)

    table = Table(title="transrpc configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("address", config.address)
    table.add_row("endpoint", config.endpoint)
    table.add_row("username", config.username or "[dim]-[/dim]")
    table.add_row("password", "********" if config.password else "[dim]-[/dim]")
    table.add_row("timeout", f"{config.timeout:g}s")
    table.add_row("tries", str(config.tries))

    console.print(table)
    console.print(f"Config file: {CONFIG_PATH}")
