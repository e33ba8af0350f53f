"""Command line entry point - one subcommand per action."""

import json
import logging
from dataclasses import asdict
from typing import Any, Optional

import typer

from transrpc.client import SessionClient
from transrpc.core.configs import build_client, get_client_config, load_raw_config
from transrpc.errors import ResponseError, RPCError

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="transrpc - talk to a Transmission-style RPC daemon.",
)


# ============================================================================
# Shared Setup
# ============================================================================

def _setup_client(address: Optional[str], endpoint: Optional[str]) -> SessionClient:
    """Load config, apply command line overrides and build the client. Exits on error."""
    try:
        raw = load_raw_config()
        if address:
            raw["address"] = address
        if endpoint:
            raw["endpoint"] = endpoint
        config = get_client_config(raw)
    except ValueError as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        typer.echo("Pass --address or set TRANSRPC_ADDRESS", err=True)
        raise typer.Exit(1)

    return build_client(config)


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2)


def _parse_arguments(arguments: Optional[str]) -> Any:
    if not arguments:
        return {}
    try:
        return json.loads(arguments)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: --arguments is not valid JSON: {e}", err=True)
        raise typer.Exit(2)


def _call(method: str, arguments: Any, address: Optional[str], endpoint: Optional[str]) -> None:
    with _setup_client(address, endpoint) as client:
        try:
            response = client.request(method, arguments)
        except ResponseError as e:
            typer.echo(f"Error: {e}", err=True)
            typer.echo(_dump(asdict(e.response)))
            raise typer.Exit(1)
        except RPCError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    typer.echo(_dump(response.arguments))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each HTTP attempt"),
) -> None:
    """Talk to a Transmission-style RPC daemon."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


# ============================================================================
# Commands
# ============================================================================

@app.command()
def call(
    method: str = typer.Argument(..., help="RPC method name, e.g. torrent-get"),
    arguments: Optional[str] = typer.Option(None, "--arguments", "-a", help="Method arguments as JSON"),
    address: Optional[str] = typer.Option(None, "--address", help="Daemon address, e.g. http://localhost:9091"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="RPC endpoint path"),
) -> None:
    """
    Call an arbitrary RPC method and print the returned arguments.

    Example: transrpc call torrent-get -a '{"fields": ["id", "name"]}'
    """
    _call(method, _parse_arguments(arguments), address, endpoint)


@app.command()
def session(
    address: Optional[str] = typer.Option(None, "--address", help="Daemon address"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="RPC endpoint path"),
) -> None:
    """Print the daemon's session settings (session-get)."""
    _call("session-get", {}, address, endpoint)


@app.command()
def settings(
    action: str = typer.Argument(..., help="Action: show"),
) -> None:
    """
    Inspect transrpc configuration.

    Lazy import config_commands to keep startup light.
    """
    from transrpc.ui.config_commands import handle_config
    handle_config(action)


def run() -> None:
    """Entry point for console script mapping."""
    app()


if __name__ == "__main__":
    run()
