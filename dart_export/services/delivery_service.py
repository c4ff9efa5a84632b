from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional
from loguru import logger
from dart_export.domain.models import DeliveredFile, ExportRequest

# Blobs larger than this spill from memory to a real temp file
_SPOOL_MAX_BYTES = 8 * 1024 * 1024


def export_filename(request: ExportRequest) -> str:
    return f"ktng_financials_CFS_CIS_{request.start_year}_{request.end_year}.csv"


class FileDelivery:
    """Hands an encoded CSV to the save-as-file mechanism.

    The blob is staged in a spooled temporary file which is closed as soon as
    the save has been triggered, whether or not the save succeeded. With an
    export_dir the file is also written there; the HTTP layer streams the
    returned DeliveredFile back as an attachment.
    """

    def __init__(self, export_dir: Optional[str] = None):
        self.export_dir = Path(export_dir) if export_dir else None

    def deliver(self, blob: str, request: ExportRequest) -> DeliveredFile:
        filename = export_filename(request)
        spool = tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_BYTES)
        try:
            spool.write(blob.encode("utf-8"))
            spool.seek(0)
            delivered = self._save(filename, spool)
        finally:
            spool.close()
        logger.info(f"delivered {delivered.filename} ({len(delivered.content)} bytes)")
        return delivered

    def _save(self, filename: str, stream: BinaryIO) -> DeliveredFile:
        content = stream.read()
        path = _write_to_dir(self.export_dir, filename, content) if self.export_dir else None
        return DeliveredFile(filename=filename, content=content, path=path)


def _write_to_dir(export_dir: Path, filename: str, content: bytes) -> str:
    export_dir.mkdir(parents=True, exist_ok=True)
    target = export_dir / filename
    part = target.with_name(target.name + ".part")
    try:
        part.write_bytes(content)
        os.replace(part, target)
    finally:
        if part.exists():
            part.unlink()
    return str(target)
