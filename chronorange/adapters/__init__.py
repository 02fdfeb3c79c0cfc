"""
Adapters layer - External holiday sources.
"""

from .holiday_source import FileHolidayProvider, HolidayProviderProtocol, StaticHolidayProvider

__all__ = ["FileHolidayProvider", "HolidayProviderProtocol", "StaticHolidayProvider"]
