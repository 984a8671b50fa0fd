import pytest
import json
import os
from pathlib import Path
from stripe_rest.core.config import Config, ConfigError

@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before and after each test"""
    saved_vars = {k: v for k, v in os.environ.items() if k.startswith("STRIPE_REST_")}

    for key in list(saved_vars.keys()):
        del os.environ[key]

    yield

    for key in list(os.environ.keys()):
        if key.startswith("STRIPE_REST_"):
            del os.environ[key]

    for key, value in saved_vars.items():
        os.environ[key] = value

@pytest.fixture
def sample_config():
    """Fixture providing a sample configuration"""
    return {
        "auth": {
            "secret_key": "sk_test_file",
            "stripe_account": "acct_file"
        },
        "http": {
            "timeout": 15.0,
            "max_connections": 8,
            "verify_ssl": True,
            "tls_backend": "system"
        },
        "logging": {
            "level": "DEBUG"
        }
    }

@pytest.fixture
def config_file(tmp_path, sample_config):
    """Fixture creating a temporary config file"""
    config_path = tmp_path / "test_config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config, f)
    return config_path

def test_config_loading(config_file):
    """Test basic configuration loading from file"""
    config = Config(config_file)
    assert config.get("auth.secret_key") == "sk_test_file"
    assert config.get("http.timeout") == 15.0
    assert config.get("http.tls_backend") == "system"
    assert config.get("logging.level") == "DEBUG"
    # untouched defaults survive the merge
    assert config.get("logging.backup_count") == 3

def test_environment_variables():
    """Test environment variable overrides"""
    os.environ["STRIPE_REST_HTTP_MAX_CONNECTIONS"] = "16"
    os.environ["STRIPE_REST_AUTH_SECRET_KEY"] = "sk_test_env"
    os.environ["STRIPE_REST_LOGGING_LEVEL"] = "DEBUG"

    config = Config()

    assert config.get("http.max_connections") == 16
    assert config.get("auth.secret_key") == "sk_test_env"
    assert config.get("logging.level") == "DEBUG"

def test_config_validation():
    """Test configuration validation rules"""
    with pytest.raises(ConfigError):
        Config().validate({"http": {"timeout": 0}})

    with pytest.raises(ConfigError):
        Config().validate({"http": {"max_connections": -1}})

    with pytest.raises(ConfigError) as exc_info:
        Config().validate({"http": {"tls_backend": "openssl"}})
    assert exc_info.value.details == {"tls_backend": "openssl"}

def test_invalid_env_value_fails_validation():
    os.environ["STRIPE_REST_HTTP_TIMEOUT"] = "-5"
    with pytest.raises(ConfigError):
        Config()

def test_config_defaults():
    """Test default configuration values"""
    config = Config()
    assert config.get("auth.secret_key") is None
    assert config.get("http.timeout") == 80.0
    assert config.get("http.tls_backend") == "certifi"
    assert config.get("http.verify_ssl") is True
    assert config.get("logging.file") is None
    assert config.get("nonexistent.key", default="default") == "default"

def test_config_update():
    """Test configuration updates"""
    config = Config()
    config.update({"http": {"timeout": 5.0}})
    assert config.get("http.timeout") == 5.0
    assert config.get("http.max_connections") == 100

def test_nested_config_access():
    """Test accessing nested configuration values"""
    config = Config()
    config.set("deep.nested.value", 42)
    assert config.get("deep.nested.value") == 42
    assert config.get("deep.nested.value.more") is None

def test_config_type_conversion():
    """Test configuration value type conversion"""
    os.environ["STRIPE_REST_HTTP_VERIFY_SSL"] = "false"
    os.environ["STRIPE_REST_HTTP_MAX_CONNECTIONS"] = "32"
    os.environ["STRIPE_REST_HTTP_TIMEOUT"] = "12.5"

    config = Config()
    assert config.get("http.verify_ssl") is False
    assert config.get("http.max_connections") == 32
    assert config.get("http.timeout") == 12.5

def test_invalid_config_file():
    """Test handling of invalid configuration file"""
    with pytest.raises(ConfigError):
        Config(Path("nonexistent_config.json"))

def test_config_serialization(sample_config, tmp_path):
    """Test configuration serialization and deserialization"""
    config = Config()
    config.update(sample_config)

    save_path = tmp_path / "saved_config.json"
    config.save(save_path)

    loaded_config = Config(save_path)
    assert loaded_config.get("auth.stripe_account") == "acct_file"
    assert loaded_config.get("http.max_connections") == 8
