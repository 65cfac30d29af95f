"""json-event-stream CLI.

Send and watch line-delimited JSON events from the shell.

Usage:
    json-event-stream emit ready                      # {"event":"ready"}
    json-event-stream emit progress 42 '"half way"'   # {"event":"progress","arguments":[42,"half way"]}
    some-tool | json-event-stream listen              # print every event
    some-tool | json-event-stream listen --format json

    json-event-stream --event-property name emit ready   # {"name":"ready"}

Options can also be set through environment variables
(JSON_EVENT_STREAM_EVENT_PROPERTY, JSON_EVENT_STREAM_ARGUMENTS_PROPERTY,
JSON_EVENT_STREAM_IGNORE_NON_JSON).
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click

from .config import DEFAULT_ARGUMENTS_PROPERTY, DEFAULT_EVENT_PROPERTY, StreamerConfig
from .errors import SerializationFailure
from .streamer import JsonEventStreamer
from .transport.stdio import StdioTransport

# Output format options
FORMAT_TEXT = "text"
FORMAT_JSON = "json"


def parse_argument(value: str) -> Any:
    """Parse a command-line argument as JSON, falling back to a plain string."""
    try:
        return json.loads(value)
    except ValueError:
        return value


def format_event(event: Any, arguments: tuple[Any, ...], output_format: str) -> str:
    """Render one received event for display."""
    if output_format == FORMAT_JSON:
        return json.dumps({"event": event, "arguments": list(arguments)}, ensure_ascii=False)

    name = event if isinstance(event, str) else json.dumps(event)
    parts = [name]
    parts.extend(json.dumps(a, ensure_ascii=False, separators=(",", ":")) for a in arguments)
    return " ".join(parts)


@click.group()
@click.option(
    "--event-property",
    default=DEFAULT_EVENT_PROPERTY,
    show_default=True,
    envvar="JSON_EVENT_STREAM_EVENT_PROPERTY",
    help="Wire field carrying the event name",
)
@click.option(
    "--arguments-property",
    default=DEFAULT_ARGUMENTS_PROPERTY,
    show_default=True,
    envvar="JSON_EVENT_STREAM_ARGUMENTS_PROPERTY",
    help="Wire field carrying the argument list",
)
@click.option(
    "--ignore-non-json",
    is_flag=True,
    envvar="JSON_EVENT_STREAM_IGNORE_NON_JSON",
    help="Silently drop input lines that are not JSON",
)
@click.option("-v", "--verbose", is_flag=True, help="Log protocol traffic to stderr")
@click.pass_context
def main(
    ctx: click.Context,
    event_property: str,
    arguments_property: str,
    ignore_non_json: bool,
    verbose: bool,
) -> None:
    """Line-delimited JSON events over stdin/stdout."""
    # Configure logging to stderr (protocol goes to stdout)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    ctx.obj = StreamerConfig(
        event_property=event_property,
        arguments_property=arguments_property,
        ignore_non_json=ignore_non_json,
    )


@main.command()
@click.argument("event")
@click.argument("args", nargs=-1)
@click.pass_obj
def emit(config: StreamerConfig, event: str, args: tuple[str, ...]) -> None:
    """Write one EVENT with ARGS to stdout.

    Each ARG is parsed as JSON; anything that is not valid JSON is sent
    as a string.
    """
    transport = StdioTransport(
        stdin=click.get_binary_stream("stdin"),
        stdout=click.get_binary_stream("stdout"),
    )
    with JsonEventStreamer(transport, config) as streamer:
        try:
            streamer.emit(event, *(parse_argument(a) for a in args))
        except SerializationFailure as e:
            raise click.ClickException(str(e)) from e


@main.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice([FORMAT_TEXT, FORMAT_JSON]),
    default=FORMAT_TEXT,
    show_default=True,
    help="Output format",
)
@click.pass_obj
def listen(config: StreamerConfig, output_format: str) -> None:
    """Print every event read from stdin until EOF."""
    transport = StdioTransport(
        stdin=click.get_binary_stream("stdin"),
        stdout=click.get_binary_stream("stdout"),
    )
    streamer = JsonEventStreamer(transport, config)

    def print_event(event: Any, *arguments: Any) -> None:
        click.echo(format_event(event, arguments, output_format))

    def print_error(*details: Any) -> None:
        click.echo("error: " + " ".join(str(d) for d in details), err=True)

    streamer.on_all(print_event)
    streamer.on("error", print_error)

    try:
        transport.run_forever()
    except KeyboardInterrupt:
        click.echo("\nShutting down", err=True)
    finally:
        streamer.close()


if __name__ == "__main__":
    main()
