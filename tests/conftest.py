import pytest
from datetime import datetime, timezone
from typer.testing import CliRunner

from aliquery.core.signing.assembler import RequestAssembler
from aliquery.domain.interfaces.diagnostics import DiagnosticSink
from aliquery.domain.interfaces.transport import Transport
from aliquery.domain.models.common import Credential
from aliquery.domain.models.result import Ok
from aliquery.infrastructure.config import settings

FIXED_TIME = datetime(2020, 1, 1, tzinfo=timezone.utc)


class RecordingSink(DiagnosticSink):
    """Collects diagnostic records for assertions."""

    def __init__(self):
        self.records = []

    def record(self, level, message):
        self.records.append((level, message))


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def credential():
    return Credential(access_key_id="AK", access_secret="SECRET")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def fixed_assembler_factory(credential, sink):
    """Builds assemblers with a frozen clock and nonce."""
    def factory(base_url="http://example.aliyuncs.com", version="2017-05-25", region_id=None, nonce="n0"):
        return RequestAssembler(
            base_url=base_url,
            version=version,
            credential=credential,
            region_id=region_id,
            clock=lambda: FIXED_TIME,
            nonce_factory=lambda: nonce,
            diagnostics=sink,
        )
    return factory


@pytest.fixture
def mock_transport(mocker):
    """A Transport whose get() succeeds with an empty RequestId by default."""
    transport = mocker.MagicMock(spec=Transport)
    transport.get.return_value = Ok({"RequestId": "req-1", "Code": "OK"})
    return transport


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests independent of the developer's config files and environment."""
    for name in ("ALIYUN_ACCESS_KEY_ID", "ALIYUN_ACCESS_SECRET", "SMS_SIGN_NAME", "SMS_TEMPLATE_CODE"):
        monkeypatch.delenv(name, raising=False)
    settings.reset_configuration()
    settings.clear_test_config()
    yield
    settings.reset_configuration()
    settings.clear_test_config()
