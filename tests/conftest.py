"""Pytest configuration.

Puts src/ on sys.path so `import cockpit_dash` works without an editable
install, and provides one QCoreApplication for the whole session so signals
and timers behave as they do in the running app.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from PySide6.QtCore import QCoreApplication  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
