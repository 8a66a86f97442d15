"""
Test suites package.

`testsuites` stays importable so that:
  - unit tests can import the harness framework directly
  - `run_tests.py` and CI jobs can resolve suite paths

No secrets live here; out-of-band values come from the environment.
"""
