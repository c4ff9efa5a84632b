from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# 재무제표명 values returned by the proxy for the two exported statements
CFS_STATEMENT_NAME = "연결재무상태표"
CIS_STATEMENT_NAME = "연결손익계산서"


class FinancialRecord(BaseModel):
    """One line item as returned by the financials proxy (DART field names)."""

    # the proxy may send years and amounts as JSON numbers
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    receipt_id: str = Field(..., alias="rcept_no")
    fiscal_year: str = Field(..., alias="bsns_year")
    statement_name: str = Field(..., alias="sj_nm")
    account_name: str = Field(..., alias="account_nm")
    account_id: Optional[str] = Field(None, alias="account_id")
    current_amount: Optional[str] = Field(None, alias="thstrm_amount")
    prior_amount: Optional[str] = Field(None, alias="frmtrm_amount")


class NormalizedRecord(BaseModel):
    """A FinancialRecord with its optional members filled in."""

    model_config = ConfigDict(frozen=True)

    receipt_id: str
    fiscal_year: str
    statement_name: str
    account_name: str
    account_id: str = ""
    current_amount: str = "0"
    prior_amount: str = "0"

    @classmethod
    def from_record(cls, rec: FinancialRecord) -> "NormalizedRecord":
        # empty strings count as missing, same as null
        return cls(
            receipt_id=rec.receipt_id,
            fiscal_year=rec.fiscal_year,
            statement_name=rec.statement_name,
            account_name=rec.account_name,
            account_id=rec.account_id or "",
            current_amount=rec.current_amount or "0",
            prior_amount=rec.prior_amount or "0",
        )


class ExportRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_year: str
    end_year: str


class ExportStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True)
class ExportState:
    status: ExportStatus = ExportStatus.IDLE
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "ExportState":
        return cls(ExportStatus.IDLE)

    @classmethod
    def loading(cls) -> "ExportState":
        return cls(ExportStatus.LOADING)

    @classmethod
    def error(cls, message: str) -> "ExportState":
        return cls(ExportStatus.ERROR, message)

    @property
    def is_loading(self) -> bool:
        return self.status is ExportStatus.LOADING


@dataclass(frozen=True)
class DeliveredFile:
    filename: str
    content: bytes
    media_type: str = "text/csv; charset=utf-8"
    path: Optional[str] = None
