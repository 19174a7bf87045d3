import pytest

from ghprofilestats import config


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "_owner_id", None)
    for name in ("USER_NAME", "ACCESS_TOKEN"):
        monkeypatch.setenv(name, "x")
        monkeypatch.delenv(name)


def test_user_name_from_environment(monkeypatch):
    monkeypatch.setenv("USER_NAME", "octo")
    assert config.get_user_name() == "octo"


def test_user_name_missing_raises():
    with pytest.raises(RuntimeError, match="USER_NAME"):
        config.get_user_name()


def test_user_name_from_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("USER_NAME=fromfile\n", encoding="utf-8")
    assert config.get_user_name() == "fromfile"


def test_access_token_missing_raises():
    with pytest.raises(RuntimeError, match="Access Token"):
        config.get_access_token()


def test_auth_headers(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN", "token")
    headers = config.get_auth_headers()
    assert headers["Authorization"] == "Bearer token"
    assert headers["User-Agent"] == config.USER_AGENT


def test_auth_headers_without_token_raises():
    with pytest.raises(RuntimeError):
        config.get_auth_headers()


def test_owner_id_round_trip():
    config.set_owner_id("node-1")
    assert config.get_owner_id() == "node-1"


def test_owner_id_set_twice_raises():
    config.set_owner_id("node-1")
    with pytest.raises(RuntimeError, match="already set"):
        config.set_owner_id("node-2")
    assert config.get_owner_id() == "node-1"


def test_owner_id_unset_raises():
    with pytest.raises(RuntimeError):
        config.get_owner_id()