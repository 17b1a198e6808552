"""Command-line interface for swift-tools.

Commands:
    - containers: List containers of the account
    - create: Create a container
    - info: Show account or container metadata
    - files: List objects of a container
    - upload: Upload a local file
    - download: Download an object
    - delete: Delete a container or object
    - set-temp-key: Configure the account temp URL key
    - temp-url: Generate a signed temporary URL

Credentials come from --user/--key or SWIFT_TOOLS_USER/SWIFT_TOOLS_KEY.
"""

import time
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .cli_params import (
    DEFAULT_AUTH_URL,
    AuthUrlOption,
    FormatOption,
    HeaderOption,
    KeyOption,
    LimitOption,
    MarkerOption,
    TimeoutOption,
    UserOption,
    parse_header_options,
)
from .schemas import SwiftStorageConfig
from .unified import StorageClient, connect

app = typer.Typer(
    name="swift-tools",
    help="Client for Swift-compatible object storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"swift-tools {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Swift-Tools: manage containers and objects of a storage account.
    """
    pass


def _connect(
    user: str,
    key: str,
    auth_url: str,
    timeout_ms: Optional[int],
    response_format: str = "",
) -> StorageClient:
    config = SwiftStorageConfig(
        user=user,
        key=key,
        auth_url=auth_url,
        timeout_ms=timeout_ms,
        response_format=response_format,
    )
    return connect(config)


def _echo_listing(items) -> None:
    if isinstance(items, str):
        typer.echo(items)
        return
    for item in items:
        typer.echo(item)


@app.command("containers")
def containers_cmd(
    user: UserOption,
    key: KeyOption,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
    output_format: FormatOption = "",
    limit: LimitOption = 10000,
    marker: MarkerOption = "",
) -> None:
    """
    List containers of the account.

    Example:
        swift-tools containers --user 12345 --key secret --format json
    """
    try:
        with _connect(user, key, auth_url, timeout_ms, output_format) as client:
            _echo_listing(client.account.list_containers(limit=limit, marker=marker))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("create")
def create_cmd(
    name: Annotated[str, typer.Argument(help="Container name")],
    user: UserOption,
    key: KeyOption,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
    header: HeaderOption = None,
) -> None:
    """
    Create a container.

    Example:
        swift-tools create photos -H "X-Container-Meta-Type: public"
    """
    try:
        headers = parse_header_options(header)
        with _connect(user, key, auth_url, timeout_ms) as client:
            descriptor = client.account.create_container(name, headers)
        typer.echo(f"Created container: {descriptor.name}")
        for meta_name, value in sorted(descriptor.metadata.items()):
            typer.echo(f"  {meta_name}: {value}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("info")
def info_cmd(
    user: UserOption,
    key: KeyOption,
    container: Annotated[
        Optional[str], typer.Argument(help="Container name; account if omitted")
    ] = None,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
) -> None:
    """
    Show account or container metadata.
    """
    try:
        with _connect(user, key, auth_url, timeout_ms) as client:
            if container:
                info = client.container(container).get_info()
            else:
                info = client.account.get_account_info()
        for meta_name, value in sorted(info.items()):
            typer.echo(f"{meta_name}: {value}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("files")
def files_cmd(
    container: Annotated[str, typer.Argument(help="Container name")],
    user: UserOption,
    key: KeyOption,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
    output_format: FormatOption = "",
    limit: LimitOption = 10000,
    marker: Annotated[
        Optional[str], typer.Option("--marker", help="Return items after this name")
    ] = None,
    prefix: Annotated[
        Optional[str], typer.Option("--prefix", help="Only names with this prefix")
    ] = None,
    path: Annotated[
        Optional[str], typer.Option("--path", help="Only names under this directory")
    ] = None,
    delimiter: Annotated[
        Optional[str], typer.Option("--delimiter", help="Roll names up at this character")
    ] = None,
) -> None:
    """
    List objects of a container.

    Example:
        swift-tools files photos --prefix 2024/ --delimiter /
    """
    try:
        with _connect(user, key, auth_url, timeout_ms, output_format) as client:
            items = client.container(container, fetch=False).list_files(
                limit=limit,
                marker=marker,
                prefix=prefix,
                path=path,
                delimiter=delimiter,
            )
        _echo_listing(items)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("upload")
def upload_cmd(
    container: Annotated[str, typer.Argument(help="Container name")],
    local_path: Annotated[Path, typer.Argument(help="Local file to upload")],
    user: UserOption,
    key: KeyOption,
    name: Annotated[
        Optional[str], typer.Option("--name", help="Remote name; file name if omitted")
    ] = None,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
    header: HeaderOption = None,
) -> None:
    """
    Upload a local file to a container.
    """
    try:
        headers = parse_header_options(header)
        with _connect(user, key, auth_url, timeout_ms) as client:
            response = client.container(container, fetch=False).put_file(
                str(local_path), name, headers
            )
        typer.echo(f"Uploaded {local_path} (etag {response.header('etag', '-')})")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("download")
def download_cmd(
    container: Annotated[str, typer.Argument(help="Container name")],
    name: Annotated[str, typer.Argument(help="Object name")],
    user: UserOption,
    key: KeyOption,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write to this file")
    ] = None,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
) -> None:
    """
    Download an object.
    """
    try:
        with _connect(user, key, auth_url, timeout_ms) as client:
            response = client.container(container, fetch=False).get_file(name)
        if response.status_code != 200:
            typer.echo(f"Error: download failed with HTTP {response.status_code}", err=True)
            raise typer.Exit(1)
        target = output or Path(Path(name).name)
        target.write_bytes(response.body)
        typer.echo(f"Saved {len(response.body):,} bytes to {target}")
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("delete")
def delete_cmd(
    target: Annotated[str, typer.Argument(help="Container or container/object")],
    user: UserOption,
    key: KeyOption,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
) -> None:
    """
    Delete an empty container or an object.
    """
    try:
        with _connect(user, key, auth_url, timeout_ms) as client:
            client.account.delete(target)
        typer.echo(f"Deleted {target}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("set-temp-key")
def set_temp_key_cmd(
    temp_key: Annotated[str, typer.Argument(help="Secret used to sign temp URLs")],
    user: UserOption,
    key: KeyOption,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
) -> None:
    """
    Configure the account temp URL key. Needed once before temp URLs work.
    """
    try:
        with _connect(user, key, auth_url, timeout_ms) as client:
            client.account.set_temp_url_key(temp_key)
        typer.echo("Temp URL key updated")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("temp-url")
def temp_url_cmd(
    container: Annotated[str, typer.Argument(help="Container name")],
    name: Annotated[str, typer.Argument(help="Object name")],
    temp_key: Annotated[str, typer.Option("--temp-key", help="Account temp URL key")],
    user: UserOption,
    key: KeyOption,
    expires_in: Annotated[
        int, typer.Option("--expires-in", help="Validity in seconds")
    ] = 3600,
    filename: Annotated[
        Optional[str], typer.Option("--filename", help="Download name override")
    ] = None,
    auth_url: AuthUrlOption = DEFAULT_AUTH_URL,
    timeout_ms: TimeoutOption = None,
) -> None:
    """
    Generate a signed temporary download URL.

    Example:
        swift-tools temp-url photos cat.jpg --temp-key s3cr3t --expires-in 600
    """
    try:
        with _connect(user, key, auth_url, timeout_ms) as client:
            url = client.container(container, fetch=False).temp_url(
                temp_key, name, int(time.time()) + expires_in, filename
            )
        typer.echo(url)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
