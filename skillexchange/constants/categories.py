"""Enumerations shared by the models, validators and search engine.

Must stay in sync with:
  frontend: client/src/types/profile.ts
"""

import enum

from skillexchange.errors import ValidationError


class SkillCategory(str, enum.Enum):
    PROGRAMMING = 'Programming & Development'
    DESIGN = 'Design & Creative'
    BUSINESS = 'Business & Marketing'
    DATA = 'Data & Analytics'
    LANGUAGES = 'Languages'
    MUSIC = 'Music & Arts'
    SPORTS = 'Sports & Fitness'
    COOKING = 'Cooking & Lifestyle'
    ACADEMIC = 'Academic & Education'
    CRAFTS = 'Crafts & DIY'
    OTHER = 'Other'


class SkillLevel(str, enum.Enum):
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'
    EXPERT = 'expert'


class MeetingType(str, enum.Enum):
    ONLINE = 'online'
    IN_PERSON = 'in-person'
    HYBRID = 'hybrid'


class Weekday(str, enum.Enum):
    MONDAY = 'monday'
    TUESDAY = 'tuesday'
    WEDNESDAY = 'wednesday'
    THURSDAY = 'thursday'
    FRIDAY = 'friday'
    SATURDAY = 'saturday'
    SUNDAY = 'sunday'


class SearchType(str, enum.Enum):
    TEACHING = 'teaching'
    LEARNING = 'learning'
    BOTH = 'both'


class SortBy(str, enum.Enum):
    RELEVANCE = 'relevance'
    RATING = 'rating'
    POPULARITY = 'popularity'
    RECENT = 'recent'
    EXPERIENCE = 'experience'


# Ordered list as the clients display it
CATEGORY_NAMES = [c.value for c in SkillCategory]
LEVEL_NAMES = [lvl.value for lvl in SkillLevel]


def parse_enum(enum_cls, value, field):
    """Parse a raw string into a member of enum_cls.

    Raises:
        ValidationError naming the field and the allowed values.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {field}",
            errors=[{
                'field': field,
                'message': f"Invalid {field} '{value}'. Must be one of: {allowed}",
                'value': value,
            }],
        )

