"""Declarative record schemas.

This module defines immutable field specifications and the builders that
turn plain configuration data into validated schema objects.
"""
