import os

import pytest

from aliquery.domain.errors import ConfigurationError
from aliquery.infrastructure.config import settings


@pytest.fixture
def yaml_config(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "aliyun:\n"
        "  access_key_id: yaml-key\n"
        "  access_secret: yaml-secret\n"
        "sms:\n"
        "  sign_name: YamlSign\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    return config_file


def load(config_file, tmp_path):
    env_file = tmp_path / "missing.env"
    settings.load_configuration(config_file=config_file, env_file=env_file)


def test_yaml_values_are_flattened(yaml_config, tmp_path):
    load(yaml_config, tmp_path)
    assert settings.get_config("logging.level") == "DEBUG"
    assert settings.get_config("sms.sign_name") == "YamlSign"


def test_environment_overrides_yaml(yaml_config, tmp_path, monkeypatch):
    load(yaml_config, tmp_path)
    monkeypatch.setenv("ALIYUN_ACCESS_KEY_ID", "env-key")
    credential = settings.get_credential()
    assert credential.access_key_id == "env-key"
    assert credential.access_secret == "yaml-secret"


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("ALIYUN_ACCESS_KEY_ID=dot-key\nALIYUN_ACCESS_SECRET=dot-secret\n")
    settings.load_configuration(config_file=tmp_path / "none.yaml", env_file=env_file)
    try:
        assert settings.get_credential().access_key_id == "dot-key"
    finally:
        # load_dotenv writes os.environ directly
        os.environ.pop("ALIYUN_ACCESS_KEY_ID", None)
        os.environ.pop("ALIYUN_ACCESS_SECRET", None)


def test_test_config_has_highest_priority(monkeypatch):
    monkeypatch.setenv("SMS_TEMPLATE_CODE", "SMS_ENV")
    settings.set_config_for_testing({"sms.template_code": "SMS_TEST"})
    assert settings.get_sms_defaults()["template_code"] == "SMS_TEST"


def test_environment_values_are_coerced_unless_disabled(monkeypatch):
    monkeypatch.setenv("PAGE_SIZE", "50")
    monkeypatch.setenv("ALIYUN_ACCESS_SECRET", "0123")
    assert settings.get_config("page.size") == 50
    assert settings.get_config("aliyun.access_secret", coerce=False) == "0123"


def test_missing_credentials_raise_configuration_error():
    with pytest.raises(ConfigurationError, match="ALIYUN_ACCESS_KEY_ID"):
        settings.get_credential()


def test_env_var_name():
    assert settings.env_var_name("sms.sign_name") == "SMS_SIGN_NAME"


def test_default_is_returned_for_unknown_key():
    assert settings.get_config("does.not.exist", "fallback") == "fallback"
