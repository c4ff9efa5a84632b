from __future__ import annotations
import io
from functools import lru_cache
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field, field_validator
from dart_export.core.config import get_settings, selectable_years
from dart_export.core.errors import ExportInProgressError
from dart_export.domain.models import ExportRequest
from dart_export.services.export_service import ExportController

router = APIRouter(prefix="/export", tags=["export"])


@lru_cache()
def get_controller() -> ExportController:
    # one controller per process: the form has a single session
    return ExportController(get_settings())


class ExportBody(BaseModel):
    start_year: str = Field(..., description="YYYY, one of /export/options years")
    end_year: str = Field(..., description="YYYY, one of /export/options years")

    @field_validator("start_year", "end_year")
    @classmethod
    def _validate_year(cls, v: str) -> str:
        allowed = selectable_years(get_settings())
        if v not in allowed:
            raise ValueError(f"year must be one of {allowed}")
        return v


@router.get("/options")
def export_options():
    s = get_settings()
    return {
        "company_id": s.COMPANY_ID,
        "company_name": s.COMPANY_NAME,
        "years": selectable_years(s),
        "default_start_year": s.DEFAULT_START_YEAR,
        "default_end_year": s.DEFAULT_END_YEAR,
    }


@router.get("/state")
def export_state(controller: ExportController = Depends(get_controller)):
    st = controller.state
    return {"status": st.status.value, "message": st.message}


@router.post("")
def export_csv(body: ExportBody, controller: ExportController = Depends(get_controller)):
    req = ExportRequest(start_year=body.start_year, end_year=body.end_year)
    try:
        delivered = controller.submit(req)
    except ExportInProgressError:
        raise HTTPException(status_code=409, detail="export already in progress")

    if delivered is None:
        raise HTTPException(status_code=502, detail=controller.state.message)

    return StreamingResponse(io.BytesIO(delivered.content), media_type=delivered.media_type, headers={
        "Content-Disposition": f"attachment; filename={delivered.filename}"
    })
