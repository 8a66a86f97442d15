"""
UI testing package: browser harness framework, page objects and live E2E tests.
"""
