from __future__ import annotations
from typing import Any, List
import requests
from loguru import logger
from pydantic import ValidationError
from dart_export.core.errors import FormatError, NetworkError, UpstreamError
from dart_export.domain.models import FinancialRecord


def validate_envelope(body: Any) -> List[FinancialRecord]:
    """Check the decoded `{"data": ...}` envelope and return its records.

    `data` is either a list of line items or `{"error": "..."}` when the
    disclosure source rejected the query.
    """
    data = body.get("data") if isinstance(body, dict) else None

    if isinstance(data, dict) and data.get("error"):
        raise UpstreamError(str(data["error"]))

    if not isinstance(data, list):
        raise FormatError()

    try:
        return [FinancialRecord.model_validate(item) for item in data]
    except ValidationError as e:
        logger.warning(f"malformed financial record in response: {e.error_count()} error(s)")
        raise FormatError() from e


def validate_response(response: requests.Response) -> List[FinancialRecord]:
    if not response.ok:
        raise NetworkError.from_status(response.reason)

    try:
        body = response.json()
    except ValueError as e:
        # requests' JSONDecodeError subclasses ValueError
        raise FormatError() from e

    return validate_envelope(body)
