"""
Command Line Interface Package

Command-line access to the ledgernum numeric core.

Command Structure:
- ledgernum: Main entry point with utility commands (version, config)
- ledgernum parse / split: Parse and subdivide decimal or currency amounts
- ledgernum ratio: Build and reduce exact ratios
- ledgernum currency: Format, parse and list ISO 4217 currencies
"""
