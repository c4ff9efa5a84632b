# dart_export/tests/conftest.py
import pytest
from dart_export.core.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        API_BASE_URL="http://proxy.test",
        COMPANY_ID="00244455",
        EXPORT_DIR=None,
    )
