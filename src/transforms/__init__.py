"""Record transforms.

This module exposes pure field transformations, fingerprint matching,
deduplication and merge strategies.
"""
