"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import pytest

from ledgernum.core import config as config_module
from ledgernum.core.currency import get_currency
from ledgernum.core.quantities import get_decimal_definition


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("LEDGERNUM_ENV", "test")
    monkeypatch.setenv("LEDGERNUM_LOCALE", "en_US")
    monkeypatch.setenv("LEDGERNUM_DECIMAL_PLACES", "2")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    # Each test starts from a freshly loaded configuration
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def def2():
    """Two decimal place definition."""
    return get_decimal_definition(2)


@pytest.fixture
def def3():
    """Three decimal place definition."""
    return get_decimal_definition(3)


@pytest.fixture
def usd():
    """US Dollar in the en_US locale."""
    return get_currency("USD", "en_US")


@pytest.fixture
def eur():
    """Euro in the en_US locale."""
    return get_currency("EUR", "en_US")


@pytest.fixture
def split_test_cases():
    """Test cases for proportional splitting of two decimal place amounts."""
    return [
        {"amount": 1, "weights": [1, 1, 1], "parts": [33, 33, 34]},
        {"amount": 1, "weights": [2, 1, 1], "parts": [50, 25, 25]},
        {"amount": 10, "weights": [1, 2], "parts": [333, 667]},
        {"amount": -1, "weights": [1, 1, 1], "parts": [-33, -33, -34]},
        {"amount": 0.05, "weights": [1, 1], "parts": [3, 2]},
    ]


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for currency handling and precision"
    )
    config.addinivalue_line(
        "markers", "quantity: Tests for fixed-point quantities"
    )
    config.addinivalue_line(
        "markers", "ratio: Tests for exact ratios and prime factorization"
    )
    config.addinivalue_line(
        "markers", "cli: Tests for the command-line interface"
    )
