"""Shared constants for the application."""

from skillexchange.constants.categories import (
    SkillCategory,
    SkillLevel,
    MeetingType,
    Weekday,
    SearchType,
    SortBy,
    CATEGORY_NAMES,
    LEVEL_NAMES,
    parse_enum,
)

__all__ = [
    'SkillCategory',
    'SkillLevel',
    'MeetingType',
    'Weekday',
    'SearchType',
    'SortBy',
    'CATEGORY_NAMES',
    'LEVEL_NAMES',
    'parse_enum',
]
