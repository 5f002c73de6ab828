import datetime as dt
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from shader_store.db import Store  # noqa: E402


class StepClock:
    """Deterministic clock: every read advances by ``step``."""

    def __init__(self, start=dt.datetime(2025, 1, 1, 12, 0, 0, tzinfo=dt.timezone.utc),
                 step=dt.timedelta(seconds=1)):
        self.current = start
        self.step = step
        self.reads = 0

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        self.reads += 1
        return value


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Never resolve to a real user database or config during tests
    monkeypatch.delenv("SHADER_STORE_DB_PATH", raising=False)
    monkeypatch.delenv("SHADER_STORE_CONFIG", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def clock():
    return StepClock()


@pytest.fixture()
def store(clock):
    s = Store(":memory:", clock=clock)
    yield s
    s.close()


@pytest.fixture()
def file_store(tmp_path):
    s = Store(str(tmp_path / "data" / "shader_live_coding.db"))
    yield s
    s.close()
