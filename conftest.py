"""
Repository-level pytest configuration.

  - `--run-e2e` switch: browser scenarios hit the live store and are
    skipped unless explicitly requested
  - Config keys are overridden through the environment
    (e.g. BROWSER_HEADLESS=true, LOGGING_LEVEL=DEBUG)
"""

from __future__ import annotations


def pytest_addoption(parser):
    group = parser.getgroup("stackdemo")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end browser scenarios against the live store (or set RUN_E2E=1)",
    )
