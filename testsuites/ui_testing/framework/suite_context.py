"""
================================================================================
Suite Context
================================================================================

Process-scoped state of one test run: configuration, the run report and the
browser settings derived from them.

Each pytest-xdist worker is its own process and builds its own context, so
workers never share a report document.

Usage:
    context = SuiteContext().start()
    try:
        section = context.report.create_test("Login", "Valid login", "Authentication")
    finally:
        context.close()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from loguru import logger

from stackdemo_tools.common import ConfigReader, ensure_directory, init_logger
from stackdemo_tools.report_tools import ReportManager

from .browser_manager import BrowserSettings


class SuiteContext:
    """Owns the config reader and report manager for the current process."""

    def __init__(
        self,
        config: Optional[ConfigReader] = None,
        worker_id: Optional[str] = None,
    ):
        self.config = config or ConfigReader()
        self.worker_id = worker_id if worker_id is not None else os.getenv("PYTEST_XDIST_WORKER")
        self.report: Optional[ReportManager] = None
        self._report_path: Optional[Path] = None

    @property
    def is_started(self) -> bool:
        return self.report is not None

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def timeout(self) -> int:
        return self.config.explicit_wait

    @property
    def browser_settings(self) -> BrowserSettings:
        return BrowserSettings.from_config(self.config)

    @property
    def report_path(self) -> Optional[Path]:
        return self._report_path

    def start(self) -> "SuiteContext":
        """Initialise logging and open the run report. Idempotent."""
        if self.report is not None:
            return self

        init_logger(level=self.config.get_str("logging.level", "INFO"))
        self.config.log_all()

        output_dir = ensure_directory(self.config.report_dir)
        self.report = ReportManager(
            output_dir=output_dir,
            report_name=self.config.get_str("report.name", "StackDemo-Test-Report"),
            title=self.config.get_str("report.title", "StackDemo Test Execution Report"),
            system_info={
                "Base URL": self.config.base_url,
                "Browser": self.config.browser,
                "Headless": str(self.config.headless),
            },
            worker_id=self.worker_id,
        )
        logger.info(f"Suite context started (worker={self.worker_id or 'main'})")
        return self

    def close(self) -> Optional[Path]:
        """
        Flush the run report.

        Returns:
            Path of the report document, or None when nothing was written
        """
        if self.report is None:
            return None
        self._report_path = self.report.flush()
        logger.info(f"Suite context closed (report={self._report_path})")
        return self._report_path

    def __enter__(self) -> "SuiteContext":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["SuiteContext"]
