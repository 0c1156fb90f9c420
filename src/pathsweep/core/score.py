#!/usr/bin/env python3
"""
Score Module

NaN-excluding, totally ordered wrapper around a float. Every cost and
accumulated cost in the sweep is a Score.
"""

import math
from functools import total_ordering
from typing import Optional


@total_ordering
class Score:
    """
    A float that is guaranteed never to be NaN.

    Because NaN is excluded, ordering is total and safe to use with min().
    Addition returns None when the float result would be NaN (for example
    inf + -inf); callers must treat None as "no viable candidate".
    """

    __slots__ = ('value',)

    def __init__(self, value: float):
        value = float(value)
        if math.isnan(value):
            raise ValueError("Score value was NaN")
        self.value = value

    @classmethod
    def checked(cls, value: float) -> Optional['Score']:
        """Build a Score, or return None if value is NaN."""
        if math.isnan(value):
            return None
        return cls(value)

    def __add__(self, other: 'Score') -> Optional['Score']:
        if not isinstance(other, Score):
            return NotImplemented
        return Score.checked(self.value + other.value)

    def __eq__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return self.value < other.value

    def __hash__(self):
        return hash(self.value)

    def __float__(self):
        return self.value

    def __repr__(self):
        return f"Score({self.value!r})"


Score.ZERO = Score(0.0)
Score.INFINITY = Score(math.inf)
Score.NEG_INFINITY = Score(-math.inf)
