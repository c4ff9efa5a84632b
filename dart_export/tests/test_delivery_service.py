# dart_export/tests/test_delivery_service.py
import tempfile
import pytest
from dart_export.domain.models import ExportRequest
from dart_export.services import delivery_service
from dart_export.services.delivery_service import FileDelivery, export_filename

_RealSpool = tempfile.SpooledTemporaryFile

BLOB = "\ufeff사업연도,재무제표명\n2022,\"연결재무상태표\""


def test_filename_pattern():
    assert export_filename(ExportRequest(start_year="2020", end_year="2023")) == "ktng_financials_CFS_CIS_2020_2023.csv"


def test_deliver_in_memory():
    out = FileDelivery().deliver(BLOB, ExportRequest(start_year="2022", end_year="2022"))
    assert out.filename == "ktng_financials_CFS_CIS_2022_2022.csv"
    assert out.content == BLOB.encode("utf-8")
    assert out.content.startswith(b"\xef\xbb\xbf")
    assert out.path is None


def test_deliver_to_export_dir(tmp_path):
    out = FileDelivery(str(tmp_path / "exports")).deliver(BLOB, ExportRequest(start_year="2019", end_year="2021"))
    target = tmp_path / "exports" / "ktng_financials_CFS_CIS_2019_2021.csv"
    assert out.path == str(target)
    assert target.read_bytes() == BLOB.encode("utf-8")
    assert [p.name for p in target.parent.iterdir()] == [target.name]


class _TrackingSpool:
    instances = []

    def __init__(self, *args, **kwargs):
        self._inner = _RealSpool(*args, **kwargs)
        self.closed_calls = 0
        _TrackingSpool.instances.append(self)

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def close(self):
        self.closed_calls += 1
        self._inner.close()


def test_transient_file_released(monkeypatch):
    _TrackingSpool.instances = []
    monkeypatch.setattr(delivery_service.tempfile, "SpooledTemporaryFile", _TrackingSpool)
    FileDelivery().deliver(BLOB, ExportRequest(start_year="2022", end_year="2022"))
    assert [s.closed_calls for s in _TrackingSpool.instances] == [1]


def test_transient_file_released_when_save_fails(monkeypatch):
    _TrackingSpool.instances = []
    monkeypatch.setattr(delivery_service.tempfile, "SpooledTemporaryFile", _TrackingSpool)

    class Broken(FileDelivery):
        def _save(self, filename, stream):
            raise OSError("disk full")

    with pytest.raises(OSError):
        Broken().deliver(BLOB, ExportRequest(start_year="2022", end_year="2022"))
    assert [s.closed_calls for s in _TrackingSpool.instances] == [1]


def test_part_file_removed_when_replace_fails(tmp_path, monkeypatch):
    def fail_replace(src, dst):
        raise OSError("read-only target")

    monkeypatch.setattr(delivery_service.os, "replace", fail_replace)
    with pytest.raises(OSError):
        FileDelivery(str(tmp_path)).deliver(BLOB, ExportRequest(start_year="2022", end_year="2022"))
    assert list(tmp_path.iterdir()) == []
