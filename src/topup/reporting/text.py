"""
Plain-text top-up report.

render() is a pure function from aggregates to text; write_report() puts
finished text on disk in one step so a failed run never leaves a partial
report behind.
"""

import tempfile
from collections.abc import Iterable
from pathlib import Path

from topup.errors import ReportWriteError
from topup.schemas.output import CompanyAggregate
from topup.schemas.user import ToppedUpUser
from topup.utils.logging import get_logger

log = get_logger(__name__)

INDENT = "\t"


def _format_users(users: Iterable[ToppedUpUser]) -> list[str]:
    lines: list[str] = []
    for user in users:
        lines.append(f"{INDENT * 2}{user.last_name}, {user.first_name}, {user.email}")
        lines.append(f"{INDENT * 3}Previous Token Balance, {user.tokens}")
        lines.append(f"{INDENT * 3}New Token Balance {user.tokens_updated}")
    return lines


def render_company(aggregate: CompanyAggregate) -> str:
    """
    Render the report block for one company.

    The block ends with a blank line so consecutive blocks are separated.
    """
    lines = [
        f"{INDENT}Company Id: {aggregate.company_id}",
        f"{INDENT}Company Name: {aggregate.company_name}",
        f"{INDENT}Users Emailed:",
        *_format_users(aggregate.users_emailed),
        f"{INDENT}Users Not Emailed:",
        *_format_users(aggregate.users_not_emailed),
        (
            f"{INDENT * 2}Total amount of top ups for "
            f"{aggregate.company_name}: {aggregate.total_top_ups}"
        ),
    ]
    return "\n".join(lines) + "\n\n"


def render(aggregates: Iterable[CompanyAggregate]) -> str:
    """Render the full report, one block per company in the given order."""
    return "".join(render_company(aggregate) for aggregate in aggregates)


def write_report(text: str, output_path: Path) -> Path:
    """
    Write report text to ``output_path``.

    The text goes to a temporary file next to the destination which is then
    renamed over it, so the destination either holds the complete report or
    is left as it was.

    Raises:
        ReportWriteError: If the text cannot be encoded as UTF-8 or the file
            cannot be written.
    """
    output_path = Path(output_path)
    tmp_path: Path | None = None
    try:
        data = text.encode("utf-8")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(data)
        tmp_path.replace(output_path)
    except (OSError, UnicodeError) as e:
        msg = f"Error writing report to '{output_path}': {e}"
        raise ReportWriteError(msg) from e
    finally:
        # Already renamed away on success
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)

    log.info("Report written", path=str(output_path), bytes=len(data))
    return output_path
