#!/usr/bin/env python3
"""
Error types for the column sweep.
"""


class InvariantViolation(RuntimeError):
    """Raised when the sweep leaves the backpointer structure in an impossible state."""
