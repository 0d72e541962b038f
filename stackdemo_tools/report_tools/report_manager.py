"""
================================================================================
Run Report Manager
================================================================================

Accumulates per-test step logs and screenshots for one test run and renders
them into a single timestamped HTML document at suite end.

Features:
- One report document per run (per xdist worker)
- Test sections with category, description and step entries
- Embedded base64 PNG screenshots
- Entries mirrored into the Allure report as steps/attachments
- Serialised appends, idempotent flush

================================================================================
"""

from __future__ import annotations

import base64
import html
import os
import platform
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import allure
from filelock import FileLock
from loguru import logger


DEFAULT_REPORT_DIR = Path("test-output") / "reports"
DEFAULT_REPORT_NAME = "StackDemo-Test-Report"
DEFAULT_REPORT_TITLE = "StackDemo Test Execution Report"


class Status(str, Enum):
    """Outcome attached to a single report entry."""
    INFO = "info"
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    WARNING = "warning"


# Higher wins when deriving a test's overall status from its entries
_STATUS_WEIGHT = {
    Status.INFO: 0,
    Status.PASS: 1,
    Status.SKIP: 2,
    Status.WARNING: 3,
    Status.FAIL: 4,
}


@dataclass(frozen=True)
class ReportEntry:
    """One step message logged against a test section."""
    test_name: str
    category: str
    message: str
    status: Status
    screenshot: Optional[str] = None
    timestamp: str = field(
        default_factory=lambda: datetime.now().strftime("%H:%M:%S")
    )


@dataclass
class TestResultSummary:
    """Summary of test sections by overall status."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    warning: int = 0
    info: int = 0

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "warning": self.warning,
            "info": self.info,
            "pass_rate": f"{self.pass_rate:.2f}%",
        }


def _encode_screenshot(data: Union[bytes, str, None]) -> Optional[str]:
    if not data:
        return None
    if isinstance(data, bytes):
        return base64.b64encode(data).decode("ascii")
    return data


class ReportTest:
    """
    A test section in the run report.

    Created through `ReportManager.create_test()`; every log call is appended
    through the owning manager so concurrent writers are serialised.
    """
    __test__ = False

    def __init__(
        self,
        manager: "ReportManager",
        name: str,
        description: str = "",
        category: str = "",
    ):
        self._manager = manager
        self.name = name
        self.description = description
        self.categories: List[str] = [category] if category else []
        self.entries: List[ReportEntry] = []
        self.started_at = datetime.now()

    @property
    def category(self) -> str:
        return ", ".join(self.categories)

    @property
    def status(self) -> Status:
        if not self.entries:
            return Status.INFO
        return max((e.status for e in self.entries), key=_STATUS_WEIGHT.__getitem__)

    def assign_category(self, category: str) -> "ReportTest":
        if category and category not in self.categories:
            self.categories.append(category)
            logger.debug(f"Assigned category '{category}' to test: {self.name}")
        return self

    def log(
        self,
        status: Status,
        message: str,
        screenshot: Union[bytes, str, None] = None,
    ) -> ReportEntry:
        entry = ReportEntry(
            test_name=self.name,
            category=self.category,
            message=message,
            status=status,
            screenshot=_encode_screenshot(screenshot),
        )
        self._manager._append(self, entry)
        return entry

    def info(self, message: str) -> ReportEntry:
        return self.log(Status.INFO, message)

    def passed(self, message: str) -> ReportEntry:
        return self.log(Status.PASS, message)

    def fail(self, message: str) -> ReportEntry:
        return self.log(Status.FAIL, message)

    def skip(self, message: str) -> ReportEntry:
        return self.log(Status.SKIP, message)

    def warning(self, message: str) -> ReportEntry:
        return self.log(Status.WARNING, message)

    def add_screenshot(
        self,
        screenshot: Union[bytes, str, None],
        title: str = "Screenshot",
    ) -> Optional[ReportEntry]:
        """Embed a PNG (raw bytes or base64 text). Empty data is ignored."""
        if not screenshot:
            return None
        return self.log(Status.INFO, title, screenshot=screenshot)

    def __repr__(self) -> str:
        return f"ReportTest(name={self.name!r}, status={self.status.value}, entries={len(self.entries)})"


class ReportManager:
    """
    Run-scoped report document.

    Usage:
        report = ReportManager(output_dir="test-output/reports")
        test = report.create_test("Add to cart", "Verify cart badge", "Shopping Cart")
        test.info("Add first product to cart")
        test.passed("Cart quantity is 1")
        path = report.flush()   # writes once; later calls are no-ops
    """

    def __init__(
        self,
        output_dir: Union[str, Path] = DEFAULT_REPORT_DIR,
        report_name: str = DEFAULT_REPORT_NAME,
        title: str = DEFAULT_REPORT_TITLE,
        system_info: Optional[Dict[str, str]] = None,
        worker_id: Optional[str] = None,
        mirror_to_allure: bool = True,
    ):
        self.output_dir = Path(output_dir)
        self.title = title
        self.mirror_to_allure = mirror_to_allure
        self.started_at = datetime.now()
        self.system_info: Dict[str, str] = {
            "Application": "StackDemo",
            "Environment": "Test",
            "OS": platform.platform(),
            "Python Version": platform.python_version(),
            "User": os.getenv("USER", os.getenv("USERNAME", "unknown")),
            "Execution Date": self.started_at.strftime("%Y-%m-%d %H:%M:%S"),
        }
        self.system_info.update(system_info or {})

        timestamp = self.started_at.strftime("%Y-%m-%d_%H-%M-%S")
        suffix = f"_{worker_id}" if worker_id else ""
        self.report_path = self.output_dir / f"{report_name}_{timestamp}{suffix}.html"

        self._lock = threading.RLock()
        self._tests: List[ReportTest] = []
        self._flushed = False

        logger.info(f"Report initialized. Report path: {self.report_path}")

    @property
    def tests(self) -> List[ReportTest]:
        with self._lock:
            return list(self._tests)

    @property
    def is_flushed(self) -> bool:
        return self._flushed

    # =========================================================================
    # Test sections
    # =========================================================================

    def create_test(
        self,
        name: str,
        description: str = "",
        category: str = "",
    ) -> ReportTest:
        """Register a new test section and return it."""
        test = ReportTest(self, name, description, category)
        with self._lock:
            self._tests.append(test)
        logger.debug(f"Created test entry: {name}")
        return test

    def _append(self, test: ReportTest, entry: ReportEntry) -> None:
        with self._lock:
            if self._flushed:
                logger.warning(
                    f"Report already flushed; entry for '{test.name}' will not be written: "
                    f"{entry.message}"
                )
            test.entries.append(entry)
        logger.debug(f"Logged {entry.status.value} to test '{test.name}': {entry.message}")

        if self.mirror_to_allure:
            self._mirror(entry)

    @staticmethod
    def _mirror(entry: ReportEntry) -> None:
        if entry.screenshot:
            allure.attach(
                base64.b64decode(entry.screenshot),
                name=entry.message,
                attachment_type=allure.attachment_type.PNG,
            )
            return
        with allure.step(f"[{entry.status.value.upper()}] {entry.message}"):
            pass

    # =========================================================================
    # Null-tolerant helpers (a test may not have a section yet)
    # =========================================================================

    def log_info(self, test: Optional[ReportTest], message: str) -> None:
        if test is not None:
            test.info(message)

    def log_pass(self, test: Optional[ReportTest], message: str) -> None:
        if test is not None:
            test.passed(message)

    def log_fail(self, test: Optional[ReportTest], message: str) -> None:
        if test is not None:
            test.fail(message)

    def log_skip(self, test: Optional[ReportTest], message: str) -> None:
        if test is not None:
            test.skip(message)

    def log_warning(self, test: Optional[ReportTest], message: str) -> None:
        if test is not None:
            test.warning(message)

    def add_screenshot(
        self,
        test: Optional[ReportTest],
        screenshot: Union[bytes, str, None],
        title: str = "Screenshot",
    ) -> None:
        if test is not None and screenshot:
            test.add_screenshot(screenshot, title)
            logger.debug(f"Added screenshot '{title}' to test")

    # =========================================================================
    # Output
    # =========================================================================

    def summary(self) -> TestResultSummary:
        summary = TestResultSummary()
        for test in self.tests:
            summary.total += 1
            status = test.status
            if status == Status.PASS:
                summary.passed += 1
            elif status == Status.FAIL:
                summary.failed += 1
            elif status == Status.SKIP:
                summary.skipped += 1
            elif status == Status.WARNING:
                summary.warning += 1
            else:
                summary.info += 1
        return summary

    def flush(self) -> Optional[Path]:
        """
        Write the report document.

        Only the first call writes; later calls return the same path without
        touching the file.

        Returns:
            Path of the written report, or None if it could not be written
        """
        with self._lock:
            if self._flushed:
                logger.debug("Report already flushed, skipping")
                return self.report_path

            document = self.render()
            try:
                self.output_dir.mkdir(parents=True, exist_ok=True)
                lock_path = self.report_path.with_suffix(".html.lock")
                with FileLock(str(lock_path)):
                    self.report_path.write_text(document, encoding="utf-8")
            except OSError as e:
                logger.error(f"Failed to write report to {self.report_path}: {e}")
                return None

            self._flushed = True

        summary = self.summary()
        logger.info(
            f"Report flushed: {self.report_path} "
            f"(total={summary.total}, passed={summary.passed}, failed={summary.failed})"
        )
        return self.report_path

    def render(self) -> str:
        """Render the current report state as an HTML document."""
        with self._lock:
            tests = list(self._tests)
            system_info = dict(self.system_info)
            summary = self.summary()

        esc = html.escape
        lines = [
            "<!DOCTYPE html>",
            "<html lang=\"en\">",
            "<head>",
            "<meta charset=\"UTF-8\">",
            f"<title>{esc(self.title)}</title>",
            f"<style>{_CSS}</style>",
            "</head>",
            "<body>",
            f"<h1>{esc(self.title)}</h1>",
            "<section class=\"summary\">",
            "<table>",
        ]
        for key, value in summary.to_dict().items():
            lines.append(f"<tr><th>{esc(key)}</th><td>{esc(str(value))}</td></tr>")
        lines.extend(["</table>", "</section>", "<section class=\"system-info\">", "<table>"])
        for key, value in system_info.items():
            lines.append(f"<tr><th>{esc(key)}</th><td>{esc(str(value))}</td></tr>")
        lines.extend(["</table>", "</section>"])

        for test in tests:
            status = test.status.value
            lines.extend([
                f"<section class=\"test status-{status}\">",
                f"<h2>{esc(test.name)} <span class=\"badge {status}\">{status.upper()}</span></h2>",
            ])
            if test.category:
                lines.append(f"<p class=\"category\">{esc(test.category)}</p>")
            if test.description:
                lines.append(f"<p class=\"description\">{esc(test.description)}</p>")
            lines.append("<ol class=\"entries\">")
            for entry in test.entries:
                lines.append(
                    f"<li class=\"{entry.status.value}\">"
                    f"<span class=\"time\">{esc(entry.timestamp)}</span> "
                    f"<span class=\"badge {entry.status.value}\">{entry.status.value.upper()}</span> "
                    f"{esc(entry.message)}"
                )
                if entry.screenshot:
                    lines.append(
                        f"<br><img alt=\"{esc(entry.message)}\" "
                        f"src=\"data:image/png;base64,{entry.screenshot}\">"
                    )
                lines.append("</li>")
            lines.extend(["</ol>", "</section>"])

        lines.extend(["</body>", "</html>"])
        return "\n".join(lines)


_CSS = (
    "body{font-family:sans-serif;margin:2em;}"
    "table{border-collapse:collapse;margin-bottom:1em;}"
    "th,td{border:1px solid #ddd;padding:4px 8px;text-align:left;}"
    ".test{border-radius:8px;box-shadow:0 2px 5px rgba(0,0,0,0.1);padding:15px;margin:1em 0;}"
    ".badge{border-radius:4px;padding:1px 6px;color:#fff;font-size:0.8em;}"
    ".badge.pass{background:#2e7d32;}.badge.fail{background:#c62828;}"
    ".badge.skip{background:#757575;}.badge.warning{background:#ef6c00;}"
    ".badge.info{background:#1565c0;}"
    ".time{color:#888;font-family:monospace;}"
    "img{max-width:100%;margin-top:0.5em;border:1px solid #ccc;}"
)


__all__ = [
    "ReportManager",
    "ReportTest",
    "ReportEntry",
    "Status",
    "TestResultSummary",
    "DEFAULT_REPORT_DIR",
    "DEFAULT_REPORT_NAME",
]
