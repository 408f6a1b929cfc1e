import os
import sys
from pathlib import Path

import pytest

# Render widgets without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from database import connection  # noqa: E402
from database.user_queries import create_table  # noqa: E402


@pytest.fixture()
def db_path(tmp_path):
    """Points the store at a fresh SQLite file and restores the original settings afterwards."""
    saved = connection.get_db_config()
    path = tmp_path / "users_test.sqlite3"
    connection.configure(engine="sqlite", path=str(path))
    yield str(path)
    connection.configure(**saved)


@pytest.fixture()
def store(db_path):
    result = create_table()
    assert result.ok, result.message
    return db_path


@pytest.fixture()
def broken_store(tmp_path):
    """A store whose SQLite file lives in a directory that does not exist."""
    saved = connection.get_db_config()
    connection.configure(engine="sqlite", path=str(tmp_path / "missing" / "users.sqlite3"))
    yield
    connection.configure(**saved)


@pytest.fixture(scope="session")
def qapp():
    from PyQt5.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


class DialogRecorder:
    """Stands in for QMessageBox static dialogs and remembers what was shown."""

    def __init__(self):
        self.shown = []
        self.answer = None

    def record(self, kind):
        def _dialog(parent, title, text, *args, **kwargs):
            self.shown.append((kind, title, text))
            return self.answer
        return _dialog

    def kinds(self):
        return [kind for kind, _, _ in self.shown]

    def last(self):
        return self.shown[-1] if self.shown else None


@pytest.fixture()
def dialogs(monkeypatch):
    from PyQt5.QtWidgets import QMessageBox
    recorder = DialogRecorder()
    recorder.answer = QMessageBox.Yes
    for kind in ("information", "warning", "critical", "question"):
        monkeypatch.setattr(QMessageBox, kind, recorder.record(kind))
    return recorder
