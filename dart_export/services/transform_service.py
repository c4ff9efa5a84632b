from __future__ import annotations
from functools import lru_cache
from typing import Iterable, List
from pyuca import Collator
from dart_export.core.errors import EmptyDatasetError, FormatError
from dart_export.domain.models import FinancialRecord, NormalizedRecord


@lru_cache()
def _collator() -> Collator:
    # loading the DUCET table is slow; build it once per process
    return Collator()


def _sort_key(rec: NormalizedRecord):
    # 연도 내림차순, 그 다음 계정명 오름차순
    return (-int(rec.fiscal_year), _collator().sort_key(rec.account_name))


def transform_records(records: Iterable[FinancialRecord]) -> List[NormalizedRecord]:
    """Normalize optional fields and order records for export.

    Raises EmptyDatasetError when there is nothing to export.
    """
    normalized = [NormalizedRecord.from_record(r) for r in records]
    if not normalized:
        raise EmptyDatasetError()
    try:
        return sorted(normalized, key=_sort_key)
    except ValueError as e:
        # bsns_year that is not a number
        raise FormatError() from e
