"""
Output and logging helpers for the qtest CLI.
"""

import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Sequence

import click


class OutputFormat(str, Enum):
    """Supported output formats."""
    TABLE = "table"
    JSON = "json"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging for the CLI."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING if not verbose else logging.INFO)


def print_success(message: str) -> None:
    click.secho(f"✓ {message}", fg="green")


def print_error(message: str, hint: Optional[str] = None) -> None:
    """Print an error (and optional hint) to stderr."""
    click.secho(f"✗ {message}", fg="red", err=True)
    if hint:
        click.echo(f"  {hint}", err=True)


def format_datetime(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def truncate_string(text: Optional[str], max_length: int = 50) -> str:
    """Truncate string with ellipsis."""
    if not text:
        return "-"
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_jsonable(value: Any) -> Any:
    """Convert records (or lists of records) to plain dicts."""
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    if is_dataclass(value) and not isinstance(value, type):
        data = asdict(value)
        data.pop("raw", None)
        return data
    return value


def print_json(data: Any) -> None:
    """Print data as formatted JSON."""
    click.echo(json.dumps(to_jsonable(data), indent=2, default=_json_default))


def print_table(headers: Sequence[str], rows: List[Sequence[Any]]) -> None:
    """Print rows as an aligned plain-text table."""
    cells = [[str(cell) if cell is not None else "-" for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    
    click.echo("  ".join(h.ljust(widths[i]) for i, h in enumerate(headers)))
    click.echo("  ".join("-" * w for w in widths))
    for row in cells:
        click.echo("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)))
    if not rows:
        click.echo("No results.")
