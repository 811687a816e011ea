"""pterapy CLI - file management commands."""
import asyncio
from pathlib import Path
from typing import Optional

import aiofiles
import typer
from rich.console import Console
from rich.table import Table

from ..client import PanelClient
from ..core.exceptions import PanelException
from ..core.path import PathResolver

app = typer.Typer(
    name="pterapy",
    help="Manage game server files through the panel API",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function, turning panel errors into a non-zero exit."""
    try:
        return asyncio.run(coro)
    except PanelException as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main_options(
    ctx: typer.Context,
    host: str = typer.Option(..., "--host", envvar="PTERAPY_HOST", help="Panel URL"),
    api_key: str = typer.Option(..., "--key", envvar="PTERAPY_API_KEY", help="Client API key"),
    server: Optional[str] = typer.Option(None, "--server", "-s", envvar="PTERAPY_SERVER", help="Server identifier"),
):
    """Connection options shared by every command."""
    ctx.obj = {"host": host, "api_key": api_key, "server": server}


def _server_id(ctx: typer.Context) -> str:
    identifier = ctx.obj["server"]
    if not identifier:
        console.print("[red]No server selected. Pass --server or set PTERAPY_SERVER.[/red]")
        raise typer.Exit(1)
    return identifier


async def _open_manager(panel: PanelClient, ctx: typer.Context):
    server = await panel.get_server(_server_id(ctx))
    return await server.get_file_manager()


async def _resolve(manager, path: str):
    """Find the node at an absolute path, or exit."""
    parent, name = PathResolver.split_parent_and_name(
        PathResolver.join_relative("", PathResolver.trim_trailing_separator(path))
    )
    if not parent:
        node = manager.get_child(name)
    else:
        node = next((f for f in await manager.get_folder_contents(parent) if f.name == name), None)

    if node is None:
        console.print(f"[red]Not found: {path}[/red]")
        raise typer.Exit(1)
    return node


@app.command()
def servers(ctx: typer.Context):
    """List servers the API key can access."""
    async def list_servers():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            table = Table()
            table.add_column("Identifier", style="cyan")
            table.add_column("Name")
            table.add_column("Node", style="dim")
            for server in await panel.get_servers():
                table.add_row(server.identifier, server.name, server.node)
            console.print(table)

    run_async(list_servers())


@app.command()
def ls(
    ctx: typer.Context,
    path: str = typer.Argument("/", help="Directory to list"),
    long: bool = typer.Option(False, "-l", "--long", help="Long format with details"),
):
    """List files and folders."""
    async def list_files():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            manager = await _open_manager(panel, ctx)
            if path.strip("/"):
                files = await manager.get_folder_contents(path)
            else:
                files = manager.contents

            if long:
                table = Table()
                table.add_column("Mode", style="cyan")
                table.add_column("Size", justify="right")
                table.add_column("Modified")
                table.add_column("Name")
                for file in files:
                    modified = file.modified_at.strftime("%Y-%m-%d %H:%M") if file.modified_at else "-"
                    size = "-" if file.is_directory else f"{file.size:,}"
                    table.add_row(file.mode, size, modified, file.name)
                console.print(table)
            else:
                for file in files:
                    if file.is_directory:
                        console.print(f"[blue]{file.name}/[/blue]")
                    else:
                        console.print(file.name)

    run_async(list_files())


@app.command()
def cat(ctx: typer.Context, path: str = typer.Argument(..., help="File to print")):
    """Print a file's contents."""
    async def show():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            manager = await _open_manager(panel, ctx)
            contents = await manager.get_file_contents(path)
            console.print(contents, markup=False, highlight=False)

    run_async(show())


@app.command()
def write(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file to create or overwrite"),
    text: Optional[str] = typer.Argument(None, help="Contents (omit to use --from-file)"),
    from_file: Optional[Path] = typer.Option(None, "--from-file", "-f", exists=True, dir_okay=False, help="Local file to upload"),
):
    """Write a remote file."""
    if text is None and from_file is None:
        console.print("[red]Give the contents or --from-file[/red]")
        raise typer.Exit(1)

    async def do_write():
        contents = text
        if from_file is not None:
            async with aiofiles.open(from_file, 'r') as f:
                contents = await f.read()

        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            manager = await _open_manager(panel, ctx)
            file = await manager.write_file(contents, path)
            console.print(f"[green]Wrote:[/green] {file.location} ({file.size:,} bytes)")

    run_async(do_write())


@app.command()
def mkdir(ctx: typer.Context, path: str = typer.Argument(..., help="Directory to create")):
    """Create a directory."""
    async def do_mkdir():
        parent, name = PathResolver.split_parent_and_name(
            PathResolver.join_relative("", PathResolver.trim_trailing_separator(path))
        )
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            manager = await _open_manager(panel, ctx)
            folder = await manager.add_directory(name, parent or "/")
            console.print(f"[green]Created folder:[/green] {folder.location}")

    run_async(do_mkdir())


@app.command()
def mv(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder to rename"),
    new_name: str = typer.Argument(..., help="New name"),
):
    """Rename a file or folder."""
    async def do_mv():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            node = await _resolve(await _open_manager(panel, ctx), path)
            renamed = await node.rename(new_name)
            console.print(f"[green]Renamed:[/green] {node.location} -> {renamed.location}")

    run_async(do_mv())


@app.command()
def cp(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File to copy"),
    dest: str = typer.Argument(..., help="Destination directory"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Name of the copy"),
):
    """Copy a file."""
    async def do_cp():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            node = await _resolve(await _open_manager(panel, ctx), path)
            await node.duplicate(dest, name)
            console.print(f"[green]Copied:[/green] {node.location} -> {dest}")

    run_async(do_cp())


@app.command()
def rm(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder to delete"),
    force: bool = typer.Option(False, "-f", "--force", help="Delete without confirmation"),
):
    """Delete a file or folder."""
    async def do_rm():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            node = await _resolve(await _open_manager(panel, ctx), path)
            if not force and not typer.confirm(f"Delete '{node.location}'?"):
                raise typer.Abort()
            await node.delete()
            console.print(f"[green]Deleted:[/green] {node.location}")

    run_async(do_rm())


@app.command()
def link(ctx: typer.Context, path: str = typer.Argument(..., help="File to link")):
    """Print a one-time download link."""
    async def do_link():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            node = await _resolve(await _open_manager(panel, ctx), path)
            console.print(await node.get_download_url(), markup=False)

    run_async(do_link())


@app.command()
def get(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Remote file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Local file or directory"),
):
    """Download a file."""
    async def do_get():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            node = await _resolve(await _open_manager(panel, ctx), path)
            with console.status(f"Downloading {node.name}"):
                saved = await node.save(output)
            console.print(f"[green]Downloaded:[/green] {saved}")

    run_async(do_get())


@app.command()
def compress(ctx: typer.Context, path: str = typer.Argument(..., help="File or folder to archive")):
    """Archive a file or folder."""
    async def do_compress():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            node = await _resolve(await _open_manager(panel, ctx), path)
            archive = await node.compress()
            console.print(f"[green]Created archive:[/green] {archive.location}")

    run_async(do_compress())


@app.command()
def extract(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Archive to extract"),
    delete: bool = typer.Option(False, "--delete", help="Delete the archive afterwards"),
):
    """Extract an archive in place."""
    async def do_extract():
        async with PanelClient(ctx.obj["host"], ctx.obj["api_key"]) as panel:
            node = await _resolve(await _open_manager(panel, ctx), path)
            await node.decompress(delete_self=delete)
            console.print(f"[green]Extracted:[/green] {node.location}")

    run_async(do_extract())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
