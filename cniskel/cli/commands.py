"""CLI commands for cniskel.

Developer tooling around the plugin protocol: inspect protocol versions and
drive a plugin binary the way a container runtime does.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cniskel import __version__
from cniskel.core.errors import CNIError
from cniskel.invoke import InvokeArgs, exec_plugin, get_plugin_info
from cniskel.version import ALL_VERSIONS, CURRENT_VERSION, verbs_for_version

app = typer.Typer(
    name="cniskel",
    help="cniskel - CNI plugin skeleton tooling",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def _print_error(err: CNIError) -> None:
    err_console.print(f"[red]CNI error {int(err.code)}[/red]: {err.message}")
    if err.details:
        err_console.print(f"  [dim]{err.details}[/dim]")


@app.command("version")
def version_command() -> None:
    """Show the cniskel version."""
    console.print(f"cniskel v{__version__} (CNI spec {CURRENT_VERSION})")


@app.command("versions")
def versions_command() -> None:
    """List known CNI protocol versions and the commands each defines."""
    table = Table(title="CNI protocol versions")
    table.add_column("Version", style="cyan")
    table.add_column("Commands")
    for v in ALL_VERSIONS:
        table.add_row(v, ", ".join(verbs_for_version(v)))
    console.print(table)


@app.command("plugin-info")
def plugin_info_command(
    plugin: Path = typer.Argument(..., help="Path to the plugin executable"),
    timeout: float = typer.Option(30.0, "--timeout", help="Seconds to wait for the plugin"),
) -> None:
    """Run VERSION against a plugin and show what it supports."""
    try:
        info = get_plugin_info(plugin, timeout_seconds=timeout)
    except CNIError as err:
        _print_error(err)
        raise typer.Exit(1)
    console.print(f"[bold]{plugin.name}[/bold] reports cniVersion {info.cni_version}")
    console.print("Supported: " + ", ".join(info.supported_versions))


@app.command("exec")
def exec_command(
    plugin: Path = typer.Argument(..., help="Path to the plugin executable"),
    command: str = typer.Option("ADD", "--command", "-c", help="CNI_COMMAND (ADD, CHECK, DEL, GC, VERSION)"),
    config: Path = typer.Option(..., "--config", help="Network configuration JSON file (stdin for the plugin)"),
    container_id: str = typer.Option("", "--containerid", help="CNI_CONTAINERID"),
    netns: str = typer.Option("", "--netns", help="CNI_NETNS"),
    if_name: str = typer.Option("eth0", "--ifname", help="CNI_IFNAME"),
    plugin_args: str = typer.Option("", "--args", help="CNI_ARGS (K=V;K2=V2)"),
    path: str = typer.Option("", "--path", help="CNI_PATH (defaults to the plugin's directory)"),
    netns_override: bool = typer.Option(False, "--netns-override", help="Set CNI_NETNS_OVERRIDE=1"),
    timeout: float = typer.Option(30.0, "--timeout", help="Seconds to wait for the plugin"),
) -> None:
    """Invoke a plugin with CNI_* variables and a config on stdin."""
    if not config.exists():
        err_console.print(f"[red]Config not found: {config}[/red]")
        raise typer.Exit(2)
    args = InvokeArgs(
        command=command,
        container_id=container_id,
        netns=netns,
        if_name=if_name,
        plugin_args=plugin_args,
        path=path or str(plugin.resolve().parent),
        netns_override=netns_override,
    )
    try:
        out = exec_plugin(plugin, config.read_bytes(), args, timeout_seconds=timeout)
    except CNIError as err:
        _print_error(err)
        raise typer.Exit(1)
    text = out.decode("utf-8", errors="replace").strip()
    if not text:
        console.print(f"[green]{command} succeeded[/green]")
        return
    try:
        console.print_json(json.dumps(json.loads(text)))
    except ValueError:
        console.print(text)
