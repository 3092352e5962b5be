"""Record validation against declarative schemas.

This module exposes the recursive validator that reports every data
problem as a structured issue instead of raising.
"""
