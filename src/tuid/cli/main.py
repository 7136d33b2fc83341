"""
TUID CLI

Command-line interface for generating and inspecting TUIDs.

Usage:
    tuid new --count 5
    tuid new --at 2021-03-08T05:54:09.208207Z
    tuid first --at 2024-01-01
    tuid parse 91Mq07yx9IxHCi5Y --tz Europe/Paris
    tuid validate 91Mq07yx9IxHCi5Y not-an-id
    tuid duration <start_id> <stop_id>
    tuid bounds
"""

import json
import os
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError

import typer
from typing_extensions import Annotated

from tuid.kernel.errors import TUIDError
from tuid.kernel.logging import LogOperation, configure_logging, get_logger, is_production
from tuid.kernel.policy import IdPolicy, load_policy
from tuid.kernel.time import Instant
from tuid.model import TUID, duration, is_valid_id

# Logs go to stderr so stdout stays machine-readable
configure_logging(
    json_output=is_production(),
    log_level=os.getenv("TUID_LOG_LEVEL", "WARNING"),
)
logger = get_logger(__name__)

app = typer.Typer(
    name="tuid",
    help="TUID - chronologically sortable unique identifiers",
    add_completion=False,
)


def fail(message: str) -> None:
    """Print an error to stderr and exit with status 1"""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def get_policy() -> IdPolicy:
    """Load the policy from the environment, exiting on bad overrides"""
    try:
        return load_policy()
    except ValueError as e:
        fail(f"Invalid TUID configuration: {e}")


def parse_or_fail(id: str) -> TUID:
    try:
        return TUID.from_string(id)
    except TUIDError as e:
        fail(str(e))


@app.command()
def new(
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of IDs to generate"),
    ] = 1,
    at: Annotated[
        Optional[str],
        typer.Option("--at", help="Embed this ISO-8601 timestamp instead of now"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Generate new TUIDs"""
    try:
        timestamp = Instant.parse(at) if at else None
        with LogOperation(logger, "generate_ids", count=count):
            tuids = [
                TUID.with_timestamp(timestamp) if timestamp is not None else TUID.now()
                for _ in range(count)
            ]
    except TUIDError as e:
        fail(str(e))

    if json_output:
        records = [{"id": t.id, "created_at": t.created_at.isoformat()} for t in tuids]
        typer.echo(json.dumps(records, indent=2))
    else:
        for t in tuids:
            typer.echo(t.id)


@app.command()
def first(
    at: Annotated[str, typer.Option("--at", help="ISO-8601 timestamp")],
) -> None:
    """Print the first (zero-entropy) TUID at a timestamp"""
    try:
        typer.echo(TUID.first(Instant.parse(at)).id)
    except TUIDError as e:
        fail(str(e))


@app.command()
def parse(
    id: Annotated[str, typer.Argument(help="TUID to inspect")],
    tz: Annotated[
        Optional[str],
        typer.Option("--tz", help="Display time zone (IANA name)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show the fields embedded in a TUID"""
    policy = get_policy()
    tuid = parse_or_fail(id)
    try:
        created = tuid.created_at.isoformat()
        timestamp = tuid.format_timestamp(tz=tz, policy=policy)
    except TUIDError as e:
        fail(str(e))
    except (ZoneInfoNotFoundError, ValueError):
        fail(f"Unknown time zone: {tz}")
    details = {
        "id": tuid.id,
        "value": tuid.value,
        "bit_length": tuid.bit_length(),
        "bits": tuid.bits(),
        "entropy": tuid.entropy,
        "created_at": created,
        "timestamp": timestamp,
        "valid": is_valid_id(tuid.id, policy),
    }

    if json_output:
        typer.echo(json.dumps(details, indent=2))
    else:
        typer.echo(f"TUID: {details['id']}")
        typer.echo(f"  Created at: {details['created_at']}")
        typer.echo(f"  Local time: {details['timestamp']}")
        typer.echo(f"  Entropy: {details['entropy']}")
        typer.echo(f"  Value: {details['value']}")
        typer.echo(f"  Bit length: {details['bit_length']}")
        typer.echo(f"  Bits: {details['bits']}")
        typer.echo(f"  Valid: {'yes' if details['valid'] else 'no'}")


@app.command()
def validate(
    ids: Annotated[list[str], typer.Argument(help="Candidate TUIDs")],
) -> None:
    """Check candidate IDs against the format and validity window"""
    policy = get_policy()
    all_valid = True
    for candidate in ids:
        valid = is_valid_id(candidate, policy)
        all_valid = all_valid and valid
        typer.echo(f"{candidate}: {'valid' if valid else 'invalid'}")

    if not all_valid:
        raise typer.Exit(1)


@app.command("duration")
def duration_cmd(
    start_id: Annotated[str, typer.Argument(help="Earlier TUID")],
    stop_id: Annotated[str, typer.Argument(help="Later TUID")],
) -> None:
    """Show the time elapsed between two TUIDs"""
    start = parse_or_fail(start_id)
    stop = parse_or_fail(stop_id)
    typer.echo(start.duration_string(stop))
    typer.echo(f"  Nanoseconds: {duration(start_id, stop_id).nanos}")


@app.command()
def bounds() -> None:
    """Show the boundary IDs of the validity window"""
    policy = get_policy()
    typer.echo(f"MIN_ID: {policy.min_id}  ({policy.min_timestamp})")
    typer.echo(f"MAX_ID: {policy.max_id}  ({policy.max_timestamp})")
    typer.echo(f"Length: {policy.id_length}")


def main() -> None:
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
