"""Command line interface.

This module maps CLI commands onto validation and harmonization calls.
"""
