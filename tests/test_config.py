"""Unit tests for core/config.py -- Settings defaults and the signing-secret policy.

Every Settings() here passes _env_file=None and the fields under test
explicitly, so a developer's .env or shell never changes the outcome.
"""

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_DB_URL, Settings

GOOD_SECRET = "s" * 32


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestSecretPolicy:
    def test_missing_secret_fails_outside_debug(self) -> None:
        with pytest.raises(ValidationError, match="JWT_SECRET is required"):
            _settings(jwt_secret="", debug=False)

    def test_debug_generates_random_secret(self) -> None:
        first = _settings(jwt_secret="", debug=True)
        second = _settings(jwt_secret="", debug=True)
        assert len(first.jwt_secret) >= 32
        assert first.jwt_secret != second.jwt_secret

    def test_short_secret_rejected_even_in_debug(self) -> None:
        with pytest.raises(ValidationError, match="at least 32 characters"):
            _settings(jwt_secret="too-short", debug=True)

    def test_explicit_secret_kept(self) -> None:
        assert _settings(jwt_secret=GOOD_SECRET).jwt_secret == GOOD_SECRET

    def test_secret_read_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("JWT_SECRET", "e" * 40)
        monkeypatch.delenv("DEBUG", raising=False)
        assert Settings(_env_file=None).jwt_secret == "e" * 40


class TestDefaults:
    def test_defaults(self, monkeypatch) -> None:
        for name in ("TOKEN_TTL_SECONDS", "BCRYPT_ROUNDS", "DATABASE_URL", "PORT", "SEED_SAMPLE_DATA"):
            monkeypatch.delenv(name, raising=False)
        settings = _settings(jwt_secret=GOOD_SECRET)
        assert settings.token_ttl_seconds == 86400
        assert settings.bcrypt_rounds == 12
        assert settings.database_url == DEFAULT_DB_URL
        assert settings.port == 8080
        assert settings.seed_sample_data is True

    @pytest.mark.parametrize("rounds", [3, 17])
    def test_bcrypt_rounds_bounded(self, rounds: int) -> None:
        with pytest.raises(ValidationError):
            _settings(jwt_secret=GOOD_SECRET, bcrypt_rounds=rounds)

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            _settings(jwt_secret=GOOD_SECRET, token_ttl_seconds=0)


class TestCorsOrigins:
    def test_comma_separated_env(self, monkeypatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example,")
        settings = _settings(jwt_secret=GOOD_SECRET)
        assert settings.cors_origins == ["http://a.example", "http://b.example"]

    def test_json_list_env(self, monkeypatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", '["http://a.example", "http://b.example"]')
        settings = _settings(jwt_secret=GOOD_SECRET)
        assert settings.cors_origins == ["http://a.example", "http://b.example"]

    def test_single_origin_env(self, monkeypatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "https://furnishare.example")
        assert _settings(jwt_secret=GOOD_SECRET).cors_origins == ["https://furnishare.example"]

    def test_list_keyword_untouched(self) -> None:
        settings = _settings(jwt_secret=GOOD_SECRET, cors_origins=["http://x.example"])
        assert settings.cors_origins == ["http://x.example"]
