import pytest

from smart_cooking.config import DEFAULT_TABLE_NAME, Settings


def test_defaults():
    settings = Settings.from_env({})

    assert settings.table_name == DEFAULT_TABLE_NAME == "smart-cooking-data-dev"
    assert settings.region_name == "us-east-1"
    assert settings.endpoint_url is None
    assert settings.max_retries == 3
    assert settings.log_level == "INFO"


def test_from_env_overrides():
    settings = Settings.from_env(
        {
            "DYNAMODB_TABLE": "smart-cooking-data-prod",
            "AWS_REGION": "ap-southeast-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_CONNECT_TIMEOUT": "0.5",
            "DYNAMODB_READ_TIMEOUT": "10",
            "DYNAMODB_MAX_RETRIES": "5",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.table_name == "smart-cooking-data-prod"
    assert settings.region_name == "ap-southeast-1"
    assert settings.endpoint_url == "http://localhost:8000"
    assert settings.connect_timeout == 0.5
    assert settings.read_timeout == 10.0
    assert settings.max_retries == 5
    assert settings.log_level == "DEBUG"


def test_from_os_environ(monkeypatch):
    monkeypatch.setenv("DYNAMODB_TABLE", "from-os-environ")

    assert Settings.from_env().table_name == "from-os-environ"


@pytest.mark.parametrize(
    "env",
    [
        {"DYNAMODB_READ_TIMEOUT": "soon"},
        {"DYNAMODB_MAX_RETRIES": "0"},
        {"DYNAMODB_MAX_RETRIES": "-1"},
    ],
)
def test_invalid_values(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)
