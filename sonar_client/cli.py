"""CLI entry point: one command group per service, one command per action.

Usage:
    sonar-client init
    sonar-client --format table webhooks list --project my-app
    sonar-client --format yaml issues search --components my-app --severities BLOCKER,CRITICAL --all-pages
    sonar-client qualityprofiles backup --language java --quality-profile "Sonar way" --output way.xml

Options are generated from the option dataclasses: strings and numbers take
a value, booleans become ``--flag/--no-flag``, lists take ``a,b,c`` and maps
take ``key=value;key=value``.
"""

import dataclasses
import functools
import inspect
import io
import json
import logging
import shutil
import sys
import typing
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click
import requests
import yaml
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from sonar_client import __version__
from sonar_client.config import Config, ConfigError, from_environment, generate_template, load
from sonar_client.errors import (
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    SonarClientError,
)
from sonar_client.formats import separated_to_list, separated_to_map
from sonar_client.options import wire_name
from sonar_client.pagination import collect_all, is_paginated
from sonar_client.services import SERVICES
from sonar_client.validation import ValidationError

logger = logging.getLogger(__name__)

# Option fields whose value may be a project alias from the config file.
_PROJECT_FIELDS = frozenset({"project", "project_key", "component"})


# ---------------------------------------------------------------------------
# Settings and output
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(ctx: click.Context) -> Config:
    """Settings file plus environment, then the global command-line options."""
    obj = ctx.obj
    if (obj["username"] is None) != (obj["password"] is None):
        raise click.UsageError("--username and --password must be given together.")
    try:
        if obj["url"] and not Path(obj["config_path"]).exists():
            config = from_environment(obj["url"])
        else:
            config = load(obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Bad settings: {exc}", err=True)
        sys.exit(1)

    if obj["url"]:
        config.url = obj["url"]
    if obj["token"]:
        config.token = obj["token"]
    if obj["username"] is not None:
        config.username = obj["username"]
        config.password = obj["password"]
    if obj["timeout"] is not None:
        config.timeout = obj["timeout"]
    return config


def _emit(data: Any, ctx: click.Context) -> None:
    """Write a result to stdout or to the file specified by --output.

    Text and binary bodies are written verbatim, event streams line by line,
    everything else is serialized as JSON or YAML.
    """
    obj = ctx.obj
    output_path = obj["output_path"]

    if data is None:
        return
    if isinstance(data, bytes):
        if output_path:
            Path(output_path).write_bytes(data)
        else:
            click.get_binary_stream("stdout").write(data)
    elif isinstance(data, requests.Response):
        try:
            _write_lines(data.iter_lines(decode_unicode=True), output_path)
        finally:
            data.close()
        return
    elif isinstance(data, Iterator):
        _write_lines((json.dumps(item, ensure_ascii=False) for item in data), output_path)
        return
    else:
        text = data if isinstance(data, str) else _serialize(data, obj["format"], obj["pretty"])
        if output_path:
            Path(output_path).write_text(text, encoding="utf-8")
        else:
            click.echo(text)
            return

    if output_path:
        click.echo(f"Result written to '{output_path}'", err=True)


def _serialize(data: Any, output_format: str, pretty: bool) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if output_format == "table":
        return _table(data)
    return json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)


def _table(data: Any) -> str:
    """Columns for the main list of a response, FIELD/VALUE rows for anything else."""
    rows = _table_rows(data)
    if rows is None and not isinstance(data, dict):
        return json.dumps(data, ensure_ascii=False)
    if rows == []:
        return "(no results)"

    if rows is None:
        table = Table("FIELD", "VALUE", box=box.SIMPLE)
        for key, value in data.items():
            if value not in (None, "", [], {}):
                table.add_row(Text(key), _cell(value))
    else:
        columns = list(dict.fromkeys(key for row in rows for key in row))
        table = Table(*columns, box=box.SIMPLE)
        for row in rows:
            table.add_row(*(_cell(row.get(column)) for column in columns))

    buffer = io.StringIO()
    Console(file=buffer, width=shutil.get_terminal_size().columns, color_system=None).print(table)
    return buffer.getvalue().rstrip("\n")


def _table_rows(data: Any) -> list[dict] | None:
    if isinstance(data, list):
        name, items = "value", data
    elif isinstance(data, dict):
        found = next(((k, v) for k, v in data.items() if isinstance(v, list)), None)
        if found is None:
            return None
        name, items = found
    else:
        return None
    return [item if isinstance(item, dict) else {name: item} for item in items]


def _cell(value: Any) -> Text:
    # Text keeps "[...]" in server values from being read as rich markup
    if value is None:
        return Text("")
    if isinstance(value, (dict, list, bool)):
        return Text(json.dumps(value, ensure_ascii=False))
    return Text(str(value))


def _write_lines(lines, output_path: str | None) -> None:
    if not output_path:
        for line in lines:
            click.echo(line)
        return
    with Path(output_path).open("w", encoding="utf-8") as out:
        for line in lines:
            out.write(f"{line}\n")


# Most specific first: the first matching class names the failure.
_ERROR_LABELS = (
    (ValidationError, "Invalid option"),
    (AuthenticationError, "Authentication failed"),
    (ForbiddenError, "Permission denied"),
    (NotFoundError, "Not found"),
    (NetworkError, "Server unreachable"),
    (SonarClientError, "SonarQube error"),
)


def _handle_client_errors(func):
    """Turn library errors into a one-line message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SonarClientError as exc:
            label = next(text for cls, text in _ERROR_LABELS if isinstance(exc, cls))
            click.echo(f"{label}: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# Command generation
# ---------------------------------------------------------------------------

def _kebab(name: str) -> str:
    return name.rstrip("_").replace("_", "-")


def _summary(doc: str | None) -> str | None:
    if not doc:
        return None
    return inspect.cleandoc(doc).splitlines()[0]


def _unwrap_optional(hint: Any) -> Any:
    args = [a for a in typing.get_args(hint) if a is not type(None)]
    if args and type(None) in typing.get_args(hint):
        return args[0]
    return hint


def option_class(method) -> type | None:
    """The option dataclass taken by a service method, if any."""
    parameter = inspect.signature(method).parameters.get("opt")
    if parameter is None:
        return None
    return _unwrap_optional(parameter.annotation)


def _field_kind(hint: Any) -> str:
    base = _unwrap_optional(hint)
    origin = typing.get_origin(base)
    if origin is list:
        (item,) = typing.get_args(base) or (str,)
        return "map-list" if typing.get_origin(item) is dict or item is dict else "list"
    if origin is dict or base is dict:
        return "map"
    if base is bool:
        return "bool"
    if base is int:
        return "int"
    if base is float:
        return "float"
    return "str"


def _click_option(field: dataclasses.Field, kind: str) -> click.Option:
    flag = _kebab(field.name)
    wire = field.metadata.get("param") or wire_name(field.name)
    help_text = f"'{wire}' parameter."
    if kind == "bool":
        return click.Option([f"--{flag}/--no-{flag}", field.name], default=None, help=help_text)
    if kind == "list":
        help_text += " Comma-separated."
    elif kind in ("map", "map-list"):
        help_text += " key=value;key=value."
    click_type = {"int": click.INT, "float": click.FLOAT}.get(kind, click.STRING)
    return click.Option(
        [f"--{flag}", field.name],
        type=click_type,
        default=None,
        multiple=kind == "map-list",
        help=help_text,
    )


def _convert(kind: str, value: Any) -> Any:
    if value is None:
        return None
    if kind == "list":
        return separated_to_list(value)
    if kind == "map":
        return separated_to_map(value)
    if kind == "map-list":
        return [separated_to_map(v) for v in value] or None
    return value


def _build_options(ctx: click.Context, option_cls: type, kwargs: dict, config: Config):
    hints = typing.get_type_hints(option_cls)
    values: dict[str, Any] = {}
    for field in dataclasses.fields(option_cls):
        kind = _field_kind(hints[field.name])
        value = kwargs.get(field.name)
        if kind == "bool" and ctx.get_parameter_source(field.name) is click.core.ParameterSource.DEFAULT:
            value = None
        value = _convert(kind, value)
        if field.name in _PROJECT_FIELDS and isinstance(value, str):
            value = config.resolve_project(value)
        values[field.name] = value
    return option_cls(**values)


def _method_command(service_name: str, method_name: str, method) -> click.Command:
    option_cls = option_class(method)
    params: list[click.Parameter] = []
    kinds: dict[str, str] = {}

    if option_cls is not None:
        hints = typing.get_type_hints(option_cls)
        for field in dataclasses.fields(option_cls):
            kinds[field.name] = _field_kind(hints[field.name])
            params.append(_click_option(field, kinds[field.name]))
        if is_paginated(option_cls):
            params.append(click.Option(
                ["--all-pages", "fetch_all"], is_flag=True, default=False,
                help="Fetch every page and merge the results.",
            ))

    @_handle_client_errors
    def callback(**kwargs) -> None:
        ctx = click.get_current_context()
        config = _load_config(ctx)
        if ctx.obj["verbose"]:
            click.echo(f"Using {config.url}", err=True)

        with config.make_client() as client:
            bound = getattr(getattr(client, service_name), method_name)
            fetch_all = kwargs.pop("fetch_all", False)
            if option_cls is None:
                result = bound()
            else:
                opt = _build_options(ctx, option_cls, kwargs, config)
                result = collect_all(bound, opt) if fetch_all else bound(opt)
            _emit(result, ctx)

    return click.Command(
        name=_kebab(method_name),
        params=params,
        callback=callback,
        help=_summary(method.__doc__) or f"Call api/{service_name}/{method_name.rstrip('_')}.",
    )


def _service_group(service_name: str, service_cls: type) -> click.Group:
    doc = service_cls.__doc__ or sys.modules[service_cls.__module__].__doc__
    group = click.Group(name=_kebab(service_name), help=_summary(doc))
    for method_name, method in inspect.getmembers(service_cls, inspect.isfunction):
        if method_name.startswith("_"):
            continue
        group.add_command(_method_command(service_name, method_name, method))
    return group


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="sonar-config.yaml", show_default=True,
              help="Settings file with server, credentials and project aliases.")
@click.option("--url", default=None, help="Server URL; wins over the settings file.")
@click.option("--token", default=None, help="User token; wins over the settings file.")
@click.option("--username", default=None, help="Basic-auth login.")
@click.option("--password", default=None, help="Basic-auth password.")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Seconds to wait for each request.")
@click.option("--format", "output_format", type=click.Choice(["json", "yaml", "table"]),
              default="json", show_default=True, help="How structured results are printed.")
@click.option("--output", "output_path", default=None, help="File to write the result to.")
@click.option("--pretty", is_flag=True, default=False, help="Indent JSON results.")
@click.option("--verbose", is_flag=True, default=False, help="Log requests to stderr.")
@click.version_option(__version__, prog_name="sonar-client")
@click.pass_context
def cli(ctx: click.Context, config_path: str, url: str | None, token: str | None,
        username: str | None, password: str | None, timeout: float | None,
        output_format: str, output_path: str | None, pretty: bool, verbose: bool) -> None:
    """SonarQube Web API client: call any action, export the result."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        url=url,
        token=token,
        username=username,
        password=password,
        timeout=timeout,
        format=output_format,
        output_path=output_path,
        pretty=pretty,
        verbose=verbose,
    )


for _name, _cls in SERVICES.items():
    cli.add_command(_service_group(_name, _cls))


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="sonar-config.yaml", show_default=True,
              help="Where to write the starter settings file.")
def init_command(output_path: str) -> None:
    """Write a starter settings file to fill in."""
    try:
        generate_template(output_path)
    except ConfigError as exc:
        click.echo(f"Cannot write settings: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Wrote '{output_path}'; set server.url and a token, then list your projects.")


def main() -> None:
    cli(obj={})
