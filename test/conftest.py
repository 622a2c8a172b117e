import pytest

from async_class.exceptions import TRACEBACK_ENV_VAR


@pytest.fixture(autouse=True)
def use_asyncio_debug(monkeypatch):
    monkeypatch.setenv("PYTHONASYNCIODEBUG", "1")


@pytest.fixture()
def full_tracebacks(monkeypatch):
    monkeypatch.setenv(TRACEBACK_ENV_VAR, "1")


@pytest.fixture()
def short_tracebacks(monkeypatch):
    monkeypatch.delenv(TRACEBACK_ENV_VAR, raising=False)
