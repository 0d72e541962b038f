"""
================================================================================
StackDemo Tools
================================================================================

Support utilities shared by the StackDemo UI test suites.

Modules:
    - common: Configuration reader and logging setup
    - report_tools: Run report (HTML document + Allure mirroring)

Example:
    from stackdemo_tools.common import ConfigReader, init_logger
    from stackdemo_tools.report_tools import ReportManager

    config = ConfigReader()
    init_logger(level=config.get_str("logging.level", "INFO"))

    report = ReportManager(output_dir=config.report_dir)
    test = report.create_test("Login", "Verify login", "Authentication")
    test.passed("Logged in")
    report.flush()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
