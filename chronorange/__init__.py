"""
chronorange - temporal range computation on top of pendulum.

Recurring occurrences, range intersection/splitting/aggregation, business-day
resolution, constrained appointment slots and batch timezone conversion.
"""

__version__ = "0.1.0"
