"""
Test suites package.

`testsuites` stays importable so `run_tests.py` and IDEs can reach:
  - ui_testing: page objects, browser framework and scenarios for the StackDemo store
  - unit: browser-free tests of the framework itself
"""
