from __future__ import annotations
from urllib.parse import urlencode
import requests
from loguru import logger
from dart_export.core.config import Settings, get_settings
from dart_export.core.errors import NetworkError
from dart_export.domain.models import ExportRequest

UA = {"User-Agent": "DartExport/1.0 (+dart_export/ingestion/financials_client.py)"}


def build_request_url(request: ExportRequest, company_id: str, base_url: str | None) -> str:
    """GET URL for the proxy's financials endpoint.

    Years are forwarded exactly as selected, even when start > end.
    """
    base = (base_url or "").rstrip("/")
    query = urlencode({"start_year": request.start_year, "end_year": request.end_year})
    return f"{base}/api/financials/{company_id}?{query}"


def fetch_financials(request: ExportRequest, settings: Settings | None = None) -> requests.Response:
    """Issue the single GET for one export. Not retried."""
    s = settings or get_settings()
    url = build_request_url(request, s.COMPANY_ID, s.API_BASE_URL)
    logger.info(f"fetching financials: {url}")
    try:
        return requests.get(url, timeout=s.HTTP_TIMEOUT_SECONDS, headers=UA)
    except requests.RequestException as e:
        # covers connection failures and an unset/invalid API_BASE_URL
        logger.warning(f"financials request failed for {url}: {e}")
        raise NetworkError(f"API 요청 실패: {e}") from e
