import pytest
from pydantic import ValidationError

from coreason_cipher.config import Settings
from coreason_cipher.key_cache import KeyCache


def test_defaults() -> None:
    settings = Settings()
    assert settings.key_cache_size == 100
    assert settings.context_prefix == "stork-chat"
    assert settings.method_tag == "aes-gcm-browser"
    assert settings.log_level == "INFO"


def test_env_var_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CIPHER_KEY_CACHE_SIZE", "10")
    monkeypatch.setenv("CIPHER_LOG_LEVEL", "debug")

    settings = Settings()
    assert settings.key_cache_size == 10
    assert settings.log_level == "DEBUG"


def test_invalid_cache_size(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CIPHER_KEY_CACHE_SIZE", "0")
    with pytest.raises(ValidationError, match="key_cache_size must be at least 1"):
        Settings()


def test_key_cache_reads_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("coreason_cipher.key_cache.settings", Settings(key_cache_size=3))
    assert KeyCache().max_size == 3
