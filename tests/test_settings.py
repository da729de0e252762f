import pytest

from api_fdw.connectors.square import SquareConnector, get_connector
from api_fdw.errors import ConfigError
from api_fdw.options import Options
from api_fdw.settings import AppSettings


def test_server_options_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FDW_BASE_URL", "https://connect.squareupsandbox.com/v2/ ")
    monkeypatch.setenv("FDW_ACCESS_TOKEN", " tok ")
    monkeypatch.setenv("APP_HTTP_MAX_ATTEMPTS", "0")
    settings = AppSettings()
    assert settings.server_options() == {
        "base_url": "https://connect.squareupsandbox.com/v2",
        "access_token": "tok",
    }
    assert settings.app_http_max_attempts == 1


def test_options_require_names_option_and_kind() -> None:
    opts = Options({"object": "customers", "blank": "  "}, kind="table")
    assert opts.require("object") == "customers"
    assert opts.require_or("blank", "fallback") == "fallback"
    with pytest.raises(ConfigError, match="required table option `blank` is missing"):
        opts.require("blank")


def test_options_get_int() -> None:
    opts = Options({"limit": "100", "zero": "0"}, kind="table")
    assert opts.get_int("limit") == 100
    assert opts.get_int("absent") is None
    with pytest.raises(ConfigError, match="positive"):
        opts.get_int("zero")


def test_square_connector_urls() -> None:
    connector = SquareConnector()
    assert (
        connector.collection_url("https://connect.squareup.com/v2/", "customers")
        == "https://connect.squareup.com/v2/customers"
    )
    assert connector.records_field("customers") == "customers"
    assert connector.records_field("/customers/") == "customers"


def test_get_connector() -> None:
    assert isinstance(get_connector("square"), SquareConnector)
    with pytest.raises(ConfigError, match="unknown connector"):
        get_connector("stripe")
