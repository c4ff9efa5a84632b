# dart_export/tests/helpers.py
import json
import requests
from dart_export.domain.models import CFS_STATEMENT_NAME


def make_response(body=None, status: int = 200, reason: str = "OK", raw: bytes | None = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r.reason = reason
    r.url = "http://proxy.test/api/financials/00244455"
    r.encoding = "utf-8"
    r._content = raw if raw is not None else json.dumps(body).encode("utf-8")
    return r


def item(year: str, account: str, **extra) -> dict:
    base = {
        "rcept_no": f"{year}0314000123",
        "bsns_year": year,
        "sj_nm": CFS_STATEMENT_NAME,
        "account_nm": account,
    }
    base.update(extra)
    return base
