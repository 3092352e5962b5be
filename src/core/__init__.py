"""Shared core layer.

This module holds errors, configuration, logging, value classification
and the rule-spec loader used by every other package.
"""
