from __future__ import annotations
import threading
from typing import Callable, Optional
import requests
from loguru import logger
from dart_export.core.config import Settings, get_settings
from dart_export.core.errors import ExportError, ExportInProgressError, UNKNOWN_ERROR_MESSAGE
from dart_export.domain.models import DeliveredFile, ExportRequest, ExportState
from dart_export.ingestion.financials_client import fetch_financials
from dart_export.ingestion.response_validator import validate_response
from dart_export.services.csv_service import encode_csv
from dart_export.services.delivery_service import FileDelivery
from dart_export.services.transform_service import transform_records

Fetcher = Callable[[ExportRequest, Settings], requests.Response]


class ExportController:
    """Runs one CSV export at a time and tracks the state shown to the user.

    Idle -> Loading -> Idle on success, or Error(message) on failure. A new
    submission is accepted from Idle or Error; while Loading it is refused.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetch: Fetcher = fetch_financials,
        delivery: Optional[FileDelivery] = None,
    ):
        self._settings = settings or get_settings()
        self._fetch = fetch
        self._delivery = delivery or FileDelivery(self._settings.EXPORT_DIR)
        self._state = ExportState.idle()
        self._lock = threading.Lock()

    @property
    def state(self) -> ExportState:
        return self._state

    def submit(self, request: ExportRequest) -> Optional[DeliveredFile]:
        """Run the export pipeline for `request`.

        Returns the delivered file, or None when the attempt failed (the
        reason is in `state.message`). Raises ExportInProgressError without
        touching state when another export is loading.
        """
        with self._lock:
            if self._state.is_loading:
                logger.warning(f"export {request.start_year}-{request.end_year} refused: already loading")
                raise ExportInProgressError("export already in progress")
            self._state = ExportState.loading()

        logger.info(f"export started: {self._settings.COMPANY_ID} {request.start_year}-{request.end_year}")
        # Loading must not outlive this call, even on KeyboardInterrupt/SystemExit
        final_state = ExportState.error(UNKNOWN_ERROR_MESSAGE)
        try:
            delivered = self._run(request)
            final_state = ExportState.idle()
            return delivered
        except ExportError as e:
            logger.warning(f"export failed ({type(e).__name__}): {e.message}")
            final_state = ExportState.error(e.message)
            return None
        except Exception:
            logger.exception("export failed unexpectedly")
            return None
        finally:
            self._state = final_state

    def _run(self, request: ExportRequest) -> DeliveredFile:
        response = self._fetch(request, self._settings)
        records = validate_response(response)
        logger.info(f"received {len(records)} records")
        rows = transform_records(records)
        return self._delivery.deliver(encode_csv(rows), request)
