import pytest

from storefront_tools.common import ConfigurationError, is_ci, load_environment
from storefront_tools.common.env import BASE_URL_VAR


@pytest.fixture
def no_base_url(monkeypatch):
    # setenv first so monkeypatch restores the original state afterwards,
    # even when a .env file sets the variable during the test
    monkeypatch.setenv(BASE_URL_VAR, "placeholder")
    monkeypatch.delenv(BASE_URL_VAR)


def test_missing_base_url_fails_fast(no_base_url, tmp_path):
    with pytest.raises(ConfigurationError, match="Missing required env var: BASE_URL"):
        load_environment(dotenv_path=tmp_path / "absent.env")


def test_blank_base_url_is_missing(monkeypatch, tmp_path):
    monkeypatch.setenv(BASE_URL_VAR, "   ")
    with pytest.raises(ConfigurationError, match="Missing required env var"):
        load_environment(dotenv_path=tmp_path / "absent.env")


@pytest.mark.parametrize("value", ["demo.spreecommerce.org", "ftp://example.com", "https://"])
def test_non_http_base_url_is_rejected(monkeypatch, tmp_path, value):
    monkeypatch.setenv(BASE_URL_VAR, value)
    with pytest.raises(ConfigurationError, match="absolute http"):
        load_environment(dotenv_path=tmp_path / "absent.env")


def test_trailing_slash_is_stripped(monkeypatch, tmp_path):
    monkeypatch.setenv(BASE_URL_VAR, "https://demo.spreecommerce.org/")
    env = load_environment(dotenv_path=tmp_path / "absent.env")

    assert env.base_url == "https://demo.spreecommerce.org"


def test_base_url_loaded_from_dotenv(no_base_url, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("BASE_URL=https://shop.example.com\n", encoding="utf-8")

    assert load_environment(dotenv_path=dotenv).base_url == "https://shop.example.com"


def test_process_environment_wins_over_dotenv(monkeypatch, tmp_path):
    monkeypatch.setenv(BASE_URL_VAR, "https://from-env.example.com")
    dotenv = tmp_path / ".env"
    dotenv.write_text("BASE_URL=https://from-file.example.com\n", encoding="utf-8")

    assert load_environment(dotenv_path=dotenv).base_url == "https://from-env.example.com"


@pytest.mark.parametrize("value, expected", [("true", True), ("1", True), ("false", False), ("", False)])
def test_is_ci(monkeypatch, value, expected):
    monkeypatch.setenv("CI", value)
    assert is_ci() is expected
