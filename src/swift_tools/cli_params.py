"""Shared CLI parameter definitions.

Every command needs the same connection options; defining them once keeps
names, environment variables and help text consistent across commands.

Usage:

    @app.command()
    def my_command(user: UserOption, key: KeyOption):
        pass
"""

from typing import Annotated, Optional

import typer

from .core import settings

UserOption = Annotated[
    str,
    typer.Option("--user", "-u", envvar="SWIFT_TOOLS_USER", help="Storage account user"),
]

KeyOption = Annotated[
    str,
    typer.Option(
        "--key",
        "-k",
        envvar="SWIFT_TOOLS_KEY",
        help="Storage account key",
        hide_input=True,
    ),
]

AuthUrlOption = Annotated[
    str,
    typer.Option("--auth-url", help="Auth endpoint URL"),
]

TimeoutOption = Annotated[
    Optional[int],
    typer.Option("--timeout-ms", help="Request timeout in milliseconds"),
]

FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Listing format: '', 'json' or 'xml'"),
]

LimitOption = Annotated[
    int,
    typer.Option("--limit", help="Maximum number of items to return"),
]

MarkerOption = Annotated[
    str,
    typer.Option("--marker", help="Return items after this name"),
]

HeaderOption = Annotated[
    Optional[list[str]],
    typer.Option("--header", "-H", help="Extra header as 'Name: Value' (repeatable)"),
]

DEFAULT_AUTH_URL = settings.auth_url


def parse_header_options(values: Optional[list[str]]) -> dict[str, str]:
    """Turn repeated ``Name: Value`` options into a header mapping."""
    headers: dict[str, str] = {}
    for value in values or []:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Header must look like 'Name: Value', got {value!r}")
        headers[name.strip()] = content.strip()
    return headers
