"""kafka-connect: command line utility for managing Kafka Connect.

Data for creating and updating connectors can come from a file or from
standard input, so these are equivalent:

    kafka-connect create --from-file connector.json
    cat connector.json | kafka-connect create

    kafka-connect update connector-name --config config.json
    cat config.json | kafka-connect update connector-name

connector.json is a request body accepted by ``POST /connectors``; config.json
is only its config object, as printed by ``kafka-connect config NAME``.
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import typer
from pydantic import BaseModel, TypeAdapter, ValidationError

from kafka_connect import connectors
from kafka_connect.client import ConnectClient
from kafka_connect.config import DEFAULT_HOST_URL, HOST_ENV, VERSION
from kafka_connect.errors import ConnectError
from kafka_connect.schemas import Connector, ConnectorConfig

STDIN = "<stdin>"

app = typer.Typer(
    name="kafka-connect",
    help="Command line utility for managing Kafka Connect.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode=None,
    pretty_exceptions_enable=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


class ArgumentValidationError(Exception):
    """Command arguments or input break an expected invariant.

    ``suggest_usage`` asks the handler to show usage help along with the
    message.
    """

    def __init__(self, message: str, suggest_usage: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.suggest_usage = suggest_usage


@dataclass(frozen=True)
class Invocation:
    """Global options resolved once per run and shared by every command."""

    host: str
    piped_input: bool = False


def stdin_is_piped() -> bool:
    return not sys.stdin.isatty()


def make_client(host: str) -> ConnectClient:
    return ConnectClient(host)


def fail(ctx: typer.Context, message: str, suggest_usage: bool = False) -> None:
    """Print a fatal error, with usage help when asked, and exit."""
    if suggest_usage:
        typer.echo(ctx.get_usage(), err=True)
        typer.echo(f"Try '{ctx.command_path} -h' for help.\n", err=True)
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=2 if suggest_usage else 1)


@contextmanager
def reported_errors(ctx: typer.Context):
    """Render validation and client errors as fatal messages."""
    try:
        yield
    except ArgumentValidationError as e:
        fail(ctx, e.message, e.suggest_usage)
    except (ConnectError, httpx.HTTPError) as e:
        fail(ctx, str(e))


def validate_host(host: str) -> None:
    try:
        absolute = httpx.URL(host).is_absolute_url
    except httpx.InvalidURL:
        absolute = False
    if not absolute:
        message = f"host {host} is not a valid absolute URL"
        if os.environ.get(HOST_ENV):
            message += f" (set by {HOST_ENV})"
        raise ArgumentValidationError(message)


def validate_create(
    name: str | None, from_file: Path | None, config: Path | None, piped_input: bool
) -> None:
    if piped_input and (from_file is not None or config is not None):
        raise ArgumentValidationError("--from-file and --config cannot be used with input from stdin")

    if not name:
        if config is not None:
            raise ArgumentValidationError("--config requires a connector name", suggest_usage=True)
        if from_file is None and not piped_input:
            raise ArgumentValidationError(
                "either a connector name or --from-file is required", suggest_usage=True
            )
    else:
        if config is None and not piped_input:
            raise ArgumentValidationError(
                "--config is required with a connector name", suggest_usage=True
            )
        if from_file is not None:
            raise ArgumentValidationError(
                "--from-file and --config are mutually exclusive", suggest_usage=True
            )


def validate_update(config: Path | None, piped_input: bool) -> None:
    if piped_input and config is not None:
        raise ArgumentValidationError("--config cannot be used with input from stdin")
    if config is None and not piped_input:
        raise ArgumentValidationError(
            "configuration input is required, try --config or pipe to stdin", suggest_usage=True
        )


def find_input_source(piped_input: bool, *paths: Path | None) -> str:
    if piped_input:
        return STDIN
    for path in paths:
        if path is not None:
            return str(path)
    raise ArgumentValidationError("no input given", suggest_usage=True)


def _decode_input(source: str) -> Any:
    try:
        contents = sys.stdin.read() if source == STDIN else Path(source).read_text(encoding="utf-8")
        return json.loads(contents)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArgumentValidationError(
            f"input was not a valid connector configuration ({source})"
        ) from e


def read_connector(source: str) -> Connector:
    data = _decode_input(source)
    # The API answers bad create requests with 500s rather than 422s, so
    # catch the obvious case of a bare config here.
    if not isinstance(data, dict) or data.get("config") is None:
        raise ArgumentValidationError(f"input was not a valid connector ({source})")
    data.setdefault("name", "")
    try:
        connector = Connector.model_validate(data)
    except ValidationError as e:
        raise ArgumentValidationError(
            f"input was not a valid connector configuration ({source})"
        ) from e

    # Some responses carry the name inside config as well, so a round-tripped
    # document may only have it there.
    if not connector.name and connector.config.get("name"):
        connector.name = connector.config["name"]
    return connector


def read_config(source: str) -> ConnectorConfig:
    data = _decode_input(source)
    try:
        return TypeAdapter(ConnectorConfig).validate_python(data)
    except ValidationError as e:
        raise ArgumentValidationError(
            f"input was not a valid connector configuration ({source})"
        ) from e


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def format_pretty_json(value: Any) -> str:
    return json.dumps(_jsonable(value), indent=2)


def print_result(ctx: typer.Context, operation: Callable, *args) -> None:
    with reported_errors(ctx), make_client(ctx.obj.host) as client:
        value, _ = operation(client, *args)
    typer.echo(format_pretty_json(value))


def affect_connector(ctx: typer.Context, name: str, action: Callable, desc: str) -> None:
    with reported_errors(ctx), make_client(ctx.obj.host) as client:
        action(client, name)
    typer.echo(f"{desc} connector {name}.")


@app.callback()
def root(
    ctx: typer.Context,
    host: str = typer.Option(
        DEFAULT_HOST_URL,
        "--host",
        "-H",
        envvar=HOST_ENV,
        help="Host address for the Kafka Connect REST API instance.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests to stderr."),
):
    """Command line utility for managing Kafka Connect."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    with reported_errors(ctx):
        validate_host(host)
    ctx.obj = Invocation(host=host, piped_input=stdin_is_piped())


@app.command("list")
def list_command(ctx: typer.Context):
    """Lists active connectors. Aliased as 'ls'."""
    print_result(ctx, connectors.list_connectors)


app.command("ls", hidden=True)(list_command)


@app.command("create")
def create_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Name of the connector to create."),
    from_file: Optional[Path] = typer.Option(
        None,
        "--from-file",
        "-f",
        exists=True,
        dir_okay=False,
        metavar="FILE",
        help="A JSON file matching API request format, including connector name.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        metavar="FILE",
        help="A JSON file containing connector config.",
    ),
):
    """Creates a new connector instance."""
    invocation: Invocation = ctx.obj
    with reported_errors(ctx):
        validate_create(name, from_file, config, invocation.piped_input)
        source = find_input_source(invocation.piped_input, from_file, config)
        if from_file is not None or not name:
            connector = read_connector(source)
        else:
            connector = Connector(name=name, config=read_config(source))

    print_result(ctx, connectors.create_connector, connector)


@app.command("update")
def update_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to update."),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        metavar="FILE",
        help="A JSON file containing connector config.",
    ),
):
    """Updates a connector."""
    invocation: Invocation = ctx.obj
    with reported_errors(ctx):
        validate_update(config, invocation.piped_input)
        connector_config = read_config(find_input_source(invocation.piped_input, config))

    print_result(ctx, connectors.update_connector_config, name, connector_config)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to delete."),
):
    """Deletes a connector. Aliased as 'rm'."""
    affect_connector(ctx, name, connectors.delete_connector, "Deleted")


app.command("rm", hidden=True)(delete_command)


@app.command("show")
def show_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to show."),
):
    """Shows information about a connector and its tasks."""
    print_result(ctx, connectors.get_connector, name)


@app.command("config")
def config_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to look up."),
):
    """Displays configuration of a connector."""
    print_result(ctx, connectors.get_connector_config, name)


@app.command("tasks")
def tasks_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to look up."),
):
    """Displays tasks currently running for a connector."""
    print_result(ctx, connectors.get_connector_tasks, name)


@app.command("status")
def status_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to look up."),
):
    """Gets current status of a connector."""
    print_result(ctx, connectors.get_connector_status, name)


@app.command("pause")
def pause_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to pause."),
):
    """Pause a connector and its tasks."""
    affect_connector(ctx, name, connectors.pause_connector, "Paused")


@app.command("resume")
def resume_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to resume."),
):
    """Resume a paused connector."""
    affect_connector(ctx, name, connectors.resume_connector, "Resumed")


@app.command("restart")
def restart_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the connector to restart."),
):
    """Restart a connector and its tasks."""
    affect_connector(ctx, name, connectors.restart_connector, "Restarted")


@app.command("version")
def version_command():
    """Shows kafka-connect version information."""
    typer.echo(f"kafka-connect version {VERSION}")
    typer.echo(f"kafka-connect-client version {VERSION}")


def main():
    app(prog_name="kafka-connect")
