"""
Test Suite for InfluxDB Reporter.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Reporter loop against in-memory registry and store
    - fixtures/: Shared sample configuration

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
"""
