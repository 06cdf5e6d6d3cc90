import os

import pytest

from fraccalc.config import ENV_PREFIX


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep FRACCALC_* variables from the calling shell out of the tests."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setenv(ENV_PREFIX + "HISTORY_FILE", str(tmp_path / "history"))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")
