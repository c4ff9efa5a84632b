from __future__ import annotations
import csv
import io
from typing import Iterable, List

from dart_export.domain.models import NormalizedRecord

BOM = "\ufeff"
HEADERS = ["사업연도", "재무제표명", "계정명", "계정ID", "당기금액(원)", "전기금액(원)"]


def _quote(value: str) -> str:
    # Embedded quotes/commas are NOT escaped; existing consumers rely on this layout.
    return f'"{value}"'


def _row(rec: NormalizedRecord) -> str:
    return ",".join([
        rec.fiscal_year,
        _quote(rec.statement_name),
        _quote(rec.account_name),
        _quote(rec.account_id),
        rec.current_amount,
        rec.prior_amount,
    ])


def encode_csv(records: Iterable[NormalizedRecord]) -> str:
    """Render sorted records as the export CSV text.

    BOM first so Excel picks up UTF-8, then the header and one line per
    record, joined with "\\n" and no trailing newline.
    """
    buf = io.StringIO()
    buf.write(BOM)
    buf.write(",".join(HEADERS))
    for rec in records:
        buf.write("\n")
        buf.write(_row(rec))
    return buf.getvalue()


def parse_csv(text: str) -> List[List[str]]:
    """Read an exported CSV back into rows (header included)."""
    if text.startswith(BOM):
        text = text[len(BOM):]
    return [row for row in csv.reader(io.StringIO(text))]
