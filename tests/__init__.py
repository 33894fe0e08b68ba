"""
Test Harness Test Suite

Test categories:
- test_assertions.py - assertion engine and equality rules
- test_suite.py - case declaration, execution and outcomes
- test_registry.py - suite registration and full runs
- test_report.py - report layout and log destination fallback
- test_settings.py - settings resolution and validation
- test_cli.py - command line entry point
"""
