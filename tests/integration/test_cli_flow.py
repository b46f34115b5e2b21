import pytest
from urllib.parse import urlsplit

from aliquery import main
from aliquery.core.command_handler import CommandHandler
from aliquery.core.services.domain_service import create_domain_service
from aliquery.core.services.sms_service import create_sms_service
from aliquery.core.signing.canonical import parse_query
from aliquery.core.signing.signer import verify_signed_uri
from aliquery.domain.errors import RequestFailed
from aliquery.domain.models.result import Err, Ok
from aliquery.infrastructure.cli.display import ConsoleDisplay


@pytest.fixture
def wired(monkeypatch, credential, mock_transport):
    """Replaces the composition root with real façades over a mocked transport."""
    ui = ConsoleDisplay()
    sms = create_sms_service(credential, mock_transport, template_code="SMS_1", sign_name="Test")
    domain = create_domain_service(credential, mock_transport)
    dependencies = {
        "ui": ui,
        "sms_service": sms,
        "domain_service": domain,
        "command_handler": CommandHandler(sms_service=sms, domain_service=domain, ui=ui),
    }
    monkeypatch.setattr(main, "_dependencies", dependencies)
    return dependencies


def sent_params(mock_transport):
    return parse_query(urlsplit(mock_transport.get.call_args.args[0]).query)


def test_sms_send_flow(runner, wired, mock_transport):
    result = runner.invoke(main.app, ["sms", "send", "13800000000", "13900000000", "-P", "code=1234"])
    assert result.exit_code == 0, result.output
    params = sent_params(mock_transport)
    assert params["PhoneNumbers"] == "13800000000,13900000000"
    assert params["TemplateParam"] == '{"code":"1234"}'
    assert "RequestId" in result.output


def test_sms_query_flow(runner, wired, mock_transport):
    result = runner.invoke(main.app, ["sms", "query", "138", "--date", "20181110", "--page-size", "20"])
    assert result.exit_code == 0, result.output
    params = sent_params(mock_transport)
    assert params["SendDate"] == "20181110"
    assert params["PageSize"] == "20"


def test_domain_order_flow(runner, wired, mock_transport):
    mock_transport.get.return_value = Ok({"TaskNo": "abdf6c13"})
    result = runner.invoke(main.app, ["domain", "order", "abc.net", "--profile-id", "12345678", "--years", "2"])
    assert result.exit_code == 0, result.output
    params = sent_params(mock_transport)
    assert params["Action"] == "SaveSingleTaskForCreatingOrderActivate"
    assert params["RegistrantProfileId"] == "12345678"
    assert "abdf6c13" in result.output


def test_domain_task_detail_flow(runner, wired, mock_transport):
    result = runner.invoke(main.app, ["domain", "task-detail", "ebf1f3e8"])
    assert result.exit_code == 0, result.output
    assert sent_params(mock_transport)["TaskNo"] == "ebf1f3e8"


def test_failure_exits_non_zero(runner, wired, mock_transport):
    mock_transport.get.return_value = Err(RequestFailed(status=500, uri="http://domain.aliyuncs.com/?x", body="boom"))
    result = runner.invoke(main.app, ["domain", "check", "google.com"])
    assert result.exit_code == 1
    assert "boom" in result.output


def test_presign_prints_signed_uri(runner, wired, mock_transport):
    result = runner.invoke(main.app, ["presign", "domain", "CheckDomain", "-P", "DomainName=example.com"])
    assert result.exit_code == 0, result.output
    uri = result.output.strip()
    assert uri.startswith("http://domain.aliyuncs.com/?Signature=")
    assert verify_signed_uri(uri, "SECRET")
    mock_transport.get.assert_not_called()


def test_malformed_param_option(runner, wired):
    result = runner.invoke(main.app, ["presign", "sms", "SendSms", "-P", "novalue"])
    assert result.exit_code != 0


def test_missing_credentials_exit_with_error(runner, monkeypatch, tmp_path):
    monkeypatch.setattr(main, "_dependencies", None)
    monkeypatch.setattr(main, "load_configuration", lambda: None)
    monkeypatch.setattr(main, "setup_logging", lambda **kwargs: None)
    result = runner.invoke(main.app, ["domain", "list"])
    assert result.exit_code == 1
    assert "ALIYUN_ACCESS_KEY_ID" in result.output
