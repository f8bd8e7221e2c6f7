from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch):
    """Prevent the developer's SVCS_* variables from influencing tests.

    The CLI's --debug flag writes SVCS_DEBUG directly, so each variable is
    registered with monkeypatch first to have it restored afterwards.
    """

    for var in ("SVCS_DIR", "SVCS_WORK_TREE", "SVCS_DEBUG"):
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
