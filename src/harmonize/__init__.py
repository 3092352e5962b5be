"""Record harmonization layer.

This module exposes the harmonizer that transforms, deduplicates and
merges records while keeping an append-only audit trail.
"""
