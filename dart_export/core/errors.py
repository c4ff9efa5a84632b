from __future__ import annotations

# User-facing messages are shown verbatim in the form's error region.
UNKNOWN_ERROR_MESSAGE = "알 수 없는 오류가 발생했습니다."


class ExportError(Exception):
    """Base class for failures that end an export attempt."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NetworkError(ExportError):
    """Transport failure or non-success HTTP status from the proxy."""

    @classmethod
    def from_status(cls, reason: str | None) -> "NetworkError":
        return cls(f"API 요청 실패: {reason or ''}")


class UpstreamError(ExportError):
    """The disclosure source reported an error of its own."""

    def __init__(self, upstream_message: str):
        super().__init__(f"DART API 오류: {upstream_message}")
        self.upstream_message = upstream_message


class FormatError(ExportError):
    def __init__(self, message: str = "백엔드로부터 잘못된 형식의 데이터를 받았습니다."):
        super().__init__(message)


class EmptyDatasetError(ExportError):
    def __init__(self, message: str = "조회는 성공했으나, 다운로드할 데이터가 없습니다."):
        super().__init__(message)


class ExportInProgressError(Exception):
    """Raised when a submission arrives while another export is loading."""
