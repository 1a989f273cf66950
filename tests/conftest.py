import pytest

from totp_service import Totp, create_app


_ENV_VARS = ("TOTP_ALGORITHM", "TOTP_DIGITS", "TOTP_PERIOD", "TOTP_MAX_DISCREPANCY",
             "LOG_LEVEL", "TOTP_SERVICE_HOME")


@pytest.fixture
def totp():
    return Totp()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv+delenv so teardown also removes anything python-dotenv adds
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("TOTP_SERVICE_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def app(clean_env):
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
