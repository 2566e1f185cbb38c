"""Pytest configuration for the scenario-compare test suite."""

# pytest-asyncio registers itself through its entry point; asyncio_mode is
# set to auto in pyproject.toml so async tests run without extra marks.
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )
