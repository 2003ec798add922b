"""
jsonscrub_cli.main
~~~~~~~~~~~~~~~~~~
Typer application entry point for the ``jsonscrub`` CLI.

Usage::

    echo '{"foo":"foo", "bar":"bar"}' | jsonscrub foo
    jsonscrub --pattern '(?i)secret' < message.json
    jsonscrub --rules rules.json --style spaced --stats < message.json

Exit status is 0 on success, 2 when no usable field selection was given or
a setting is invalid, and 1 when the input could not be transcoded.

Environment variables::

    JSONSCRUB_MASK         (default: REDACTED)
    JSONSCRUB_STYLE        (default: compact)
    JSONSCRUB_BUFFER_SIZE  (default: 4096)
    JSONSCRUB_LOG_LEVEL    (default: WARNING)
"""

from __future__ import annotations

import logging
import sys
from collections import Counter
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from jsonscrub_cli.config import load_settings
from jsonscrub_core import (
    CallbackPolicy,
    ConfigurationError,
    JsonScrubError,
    MaskRules,
    SeparatorStyle,
    configure_logging,
    field_set_policy,
    transcode_stream,
)

logger = logging.getLogger(__name__)

USAGE = """\
Usage: jsonscrub [OPTIONS] FIELD...

jsonscrub masks string fields of json input, replacing them with "REDACTED".

It takes a list of case-sensitive field names as its arguments, then reads
arbitrary json structure over stdin and writes the masked version to stdout.

For example, the following call:

    echo '{"foo":"foo", "bar":"bar"}' | jsonscrub foo

will produce this:

    {"foo":"REDACTED","bar":"bar"}

Run "jsonscrub --help" for all options.
"""

app = typer.Typer(
    name="jsonscrub",
    help="Mask string fields of a JSON document read from stdin.",
    add_completion=False,
)


def _build_matcher(
    fields: list[str],
    pattern: str | None,
    rules: MaskRules | None,
) -> Callable[[str], bool] | None:
    """Return a key predicate, or None when nothing was selected."""
    policies = []
    if fields or pattern is not None:
        policies.append(field_set_policy(fields, pattern))
    if rules is not None:
        policies.append(rules.to_policy())
    if not policies:
        return None
    return lambda key: any(policy.matches(key) for policy in policies)


@app.command()
def main(
    fields: Annotated[
        list[str] | None,
        typer.Argument(help="Case-sensitive field names to mask", show_default=False),
    ] = None,
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", "-e", help="Regular expression searched in field names"),
    ] = None,
    rules_file: Annotated[
        Path | None,
        typer.Option(
            "--rules",
            "-r",
            help="JSON rules file with keys, pattern and style",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    mask: Annotated[str | None, typer.Option("--mask", "-m", help="Replacement text")] = None,
    style: Annotated[
        SeparatorStyle | None,
        typer.Option("--style", "-s", case_sensitive=False, help="Separator style"),
    ] = None,
    stats: Annotated[bool, typer.Option("--stats", help="Print masked-key counts on stderr")] = False,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Log level")] = None,
) -> None:
    """Mask string values of the given fields; read stdin, write stdout."""
    try:
        settings = load_settings()
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        typer.echo(f"Error: invalid setting JSONSCRUB_{location.upper()}: {first['msg']}", err=True)
        raise typer.Exit(code=2) from exc
    configure_logging(level=log_level or settings.LOG_LEVEL, service_name="jsonscrub")

    try:
        rules = MaskRules.from_file(rules_file) if rules_file is not None else None
        matches = _build_matcher(fields or [], pattern, rules)
    except (ConfigurationError, ValueError, OSError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    if matches is None:
        typer.echo(USAGE, err=True)
        raise typer.Exit(code=2)

    if style is None:
        style = rules.style if rules is not None and "style" in rules.model_fields_set else settings.STYLE
    replacement = mask if mask is not None else settings.MASK
    counts: Counter[str] = Counter()

    def mask_field(key: str, value: str) -> tuple[str, bool]:
        if matches(key):
            counts[key] += 1
            return replacement, True
        return value, False

    logger.debug("Masking configured", extra={"fields": len(fields or []), "style": str(style)})
    try:
        transcode_stream(
            sys.stdout.buffer,
            sys.stdin.buffer,
            CallbackPolicy(mask_field),
            style,
            buffer_size=settings.BUFFER_SIZE,
        )
    except JsonScrubError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if stats:
        from jsonscrub_cli.output import print_stats

        print_stats(counts)


if __name__ == "__main__":
    app()
