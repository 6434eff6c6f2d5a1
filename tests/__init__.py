"""
Test Suite for ledgernum

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration, cross-module and top-level CLI tests

Test Categories:
- Core numerics (primes, ratios, quantities, currencies)
- JSON serialization and configuration
- Command-line interface
"""
