"""
Service layer helpers that bind configuration and adapters to domain logic.
"""

from .temporal_engine import TemporalEngine

__all__ = ["TemporalEngine"]
