"""Request payload validation for profile and declared-skill mutations.

Each validator checks the whole payload, collects field-level errors and
raises a single ValidationError, so nothing is written when any field is bad.
On success it returns the cleaned values keyed by model attribute.
"""

import re
from datetime import date
from urllib.parse import urlparse

from skillexchange.constants import SkillCategory, SkillLevel, MeetingType, Weekday, parse_enum
from skillexchange.errors import ValidationError

EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
TIME_REGEX = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')

# Largest id a 64-bit signed primary key can hold
MAX_ID = 2 ** 63 - 1

# Allowed top-level fields for profile update (prevent mass assignment)
PROFILE_ALLOWED_FIELDS = {
    'name', 'bio', 'dateOfBirth', 'location', 'contact', 'preferences', 'avatar'
}
LOCATION_FIELDS = {'city': 100, 'country': 100}
CONTACT_FIELDS = ('phone', 'website', 'linkedin', 'github', 'twitter')
CONTACT_URL_FIELDS = {'website', 'linkedin', 'github', 'twitter'}
PREFERENCE_FIELDS = {'availableHours', 'meetingTypes', 'languages', 'maxDistance', 'sessionDuration'}

SKILL_ALLOWED_FIELDS = {
    'name', 'category', 'level', 'description', 'tags',
    'yearsOfExperience', 'certifications', 'isTeaching', 'isLearning'
}

MAX_LIST_ITEMS = 20
MAX_ITEM_LENGTH = 50


class _Errors:
    def __init__(self):
        self.items = []

    def add(self, field, message, value=None):
        error = {'field': field, 'message': message}
        if value is not None:
            error['value'] = value
        self.items.append(error)

    def raise_if_any(self):
        if self.items:
            raise ValidationError('Validation errors', errors=self.items)


def _string(data, key, field, errors, min_len=0, max_len=None, allow_empty=True):
    value = data[key]
    if value is None:
        return None
    if not isinstance(value, str):
        errors.add(field, f'{field} must be a string')
        return None
    value = value.strip()
    if not value and not allow_empty:
        errors.add(field, f'{field} is required')
        return None
    if value and len(value) < min_len:
        errors.add(field, f'{field} must be at least {min_len} characters')
    if max_len is not None and len(value) > max_len:
        errors.add(field, f'{field} must be at most {max_len} characters')
    return value


def _string_list(data, key, field, errors, lowercase=False):
    value = data[key]
    if value is None:
        return []
    if not isinstance(value, list):
        errors.add(field, f'{field} must be a list')
        return []
    if len(value) > MAX_LIST_ITEMS:
        errors.add(field, f'{field} can have at most {MAX_LIST_ITEMS} items')
        return []
    items = []
    for item in value:
        if not isinstance(item, str) or len(item.strip()) > MAX_ITEM_LENGTH:
            errors.add(field, f'Each item in {field} must be a string under {MAX_ITEM_LENGTH} characters')
            return []
        item = item.strip()
        if item:
            items.append(item.lower() if lowercase else item)
    return items


def _integer(data, key, field, errors, minimum, maximum):
    value = data[key]
    if value is None:
        return None
    if isinstance(value, bool):
        errors.add(field, f'{field} must be a valid integer')
        return None
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        errors.add(field, f'{field} must be a valid integer')
        return None
    if isinstance(value, float) and not value.is_integer():
        errors.add(field, f'{field} must be a valid integer')
        return None
    if number < minimum or number > maximum:
        errors.add(field, f'{field} must be between {minimum} and {maximum}')
        return None
    return number


def _boolean(data, key, field, errors):
    value = data[key]
    if not isinstance(value, bool):
        errors.add(field, f'{field} must be a boolean')
        return False
    return value


def _enum(enum_cls, data, key, field, errors):
    try:
        return parse_enum(enum_cls, data[key], field)
    except ValidationError as e:
        errors.items.extend(e.errors)
        return None


def _is_url(value):
    parsed = urlparse(value)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def validate_email(email):
    return isinstance(email, str) and len(email) <= 254 and bool(EMAIL_REGEX.match(email.strip()))


def validate_profile_update(data):
    """Validate a PUT /api/profile payload.

    Nested blocks (location, contact, preferences) are partial: only the keys
    present are changed.
    """
    errors = _Errors()
    if not isinstance(data, dict) or not data:
        raise ValidationError.for_field('body', 'No data provided')

    unknown = set(data.keys()) - PROFILE_ALLOWED_FIELDS
    if unknown:
        errors.add('body', f"Unknown fields: {', '.join(sorted(unknown))}")

    cleaned = {}

    if 'name' in data:
        name = _string(data, 'name', 'name', errors, min_len=2, max_len=50, allow_empty=False)
        if data['name'] is None:
            errors.add('name', 'name is required')
        elif name:
            cleaned['name'] = name

    if 'bio' in data:
        cleaned['bio'] = _string(data, 'bio', 'bio', errors, max_len=500) or None

    if 'avatar' in data:
        avatar = _string(data, 'avatar', 'avatar', errors, max_len=500)
        if avatar and not _is_url(avatar):
            errors.add('avatar', 'avatar must be a valid URL')
        cleaned['avatar'] = avatar or None

    if 'dateOfBirth' in data:
        raw = data['dateOfBirth']
        if raw in (None, ''):
            cleaned['date_of_birth'] = None
        else:
            try:
                cleaned['date_of_birth'] = date.fromisoformat(str(raw)[:10])
            except ValueError:
                errors.add('dateOfBirth', 'dateOfBirth must be an ISO date (YYYY-MM-DD)', raw)

    if 'location' in data:
        location = data['location']
        if not isinstance(location, dict):
            errors.add('location', 'location must be an object')
        else:
            for key, max_len in LOCATION_FIELDS.items():
                if key in location:
                    cleaned[key] = _string(location, key, f'location.{key}', errors, max_len=max_len) or None

    if 'contact' in data:
        contact = data['contact']
        if not isinstance(contact, dict):
            errors.add('contact', 'contact must be an object')
        else:
            for key in CONTACT_FIELDS:
                if key not in contact:
                    continue
                value = _string(contact, key, f'contact.{key}', errors, max_len=500)
                if value and key in CONTACT_URL_FIELDS and not _is_url(value):
                    errors.add(f'contact.{key}', f'contact.{key} must be a valid URL', value)
                cleaned[key] = value or None

    if 'preferences' in data:
        cleaned.update(_validate_preferences(data['preferences'], errors))

    errors.raise_if_any()
    return cleaned


def _validate_preferences(preferences, errors):
    cleaned = {}
    if not isinstance(preferences, dict):
        errors.add('preferences', 'preferences must be an object')
        return cleaned

    unknown = set(preferences.keys()) - PREFERENCE_FIELDS
    if unknown:
        errors.add('preferences', f"Unknown fields: {', '.join(sorted(unknown))}")

    if 'meetingTypes' in preferences:
        raw = _string_list(preferences, 'meetingTypes', 'preferences.meetingTypes', errors)
        types = []
        for value in raw:
            member = _enum(MeetingType, {'v': value}, 'v', 'preferences.meetingTypes', errors)
            if member and member.value not in types:
                types.append(member.value)
        cleaned['meeting_types'] = types

    if 'languages' in preferences:
        cleaned['languages'] = _string_list(preferences, 'languages', 'preferences.languages', errors)

    if 'availableHours' in preferences:
        cleaned['available_hours'] = _validate_available_hours(preferences['availableHours'], errors)

    if 'maxDistance' in preferences:
        cleaned['max_distance'] = _integer(preferences, 'maxDistance', 'preferences.maxDistance',
                                           errors, 0, 20000)

    if 'sessionDuration' in preferences:
        cleaned['session_duration'] = _integer(preferences, 'sessionDuration', 'preferences.sessionDuration',
                                               errors, 15, 480)

    return {k: v for k, v in cleaned.items() if v is not None}


def _validate_available_hours(slots, errors):
    field = 'preferences.availableHours'
    if slots is None:
        return []
    if not isinstance(slots, list):
        errors.add(field, f'{field} must be a list')
        return []

    cleaned = []
    for slot in slots:
        if not isinstance(slot, dict):
            errors.add(field, 'Each available hour must be an object')
            continue
        day = _enum(Weekday, slot, 'day', f'{field}.day', errors) if 'day' in slot else None
        if day is None and 'day' not in slot:
            errors.add(f'{field}.day', 'day is required')
        start, end = slot.get('startTime'), slot.get('endTime')
        for key, value in (('startTime', start), ('endTime', end)):
            if value is not None and (not isinstance(value, str) or not TIME_REGEX.match(value)):
                errors.add(f'{field}.{key}', f'{key} must be HH:MM', value)
        if day is not None:
            cleaned.append({'day': day.value, 'startTime': start, 'endTime': end})
    return cleaned


def validate_user_skill(data, partial=False):
    """Validate a declared-skill payload.

    partial=False (create) requires name, category and level; partial=True
    (update) validates only the fields present.
    """
    errors = _Errors()
    if not isinstance(data, dict) or not data:
        raise ValidationError.for_field('body', 'No data provided')

    unknown = set(data.keys()) - SKILL_ALLOWED_FIELDS
    if unknown:
        errors.add('body', f"Unknown fields: {', '.join(sorted(unknown))}")

    if not partial:
        for required in ('name', 'category', 'level'):
            if data.get(required) in (None, ''):
                errors.add(required, f'{required} is required')

    cleaned = {}

    if data.get('name') is not None:
        name = _string(data, 'name', 'name', errors, min_len=1, max_len=100, allow_empty=False)
        if name:
            cleaned['name'] = name

    if data.get('category') not in (None, ''):
        category = _enum(SkillCategory, data, 'category', 'category', errors)
        if category:
            cleaned['category'] = category

    if data.get('level') not in (None, ''):
        level = _enum(SkillLevel, data, 'level', 'level', errors)
        if level:
            cleaned['level'] = level

    if 'description' in data:
        cleaned['description'] = _string(data, 'description', 'description', errors, max_len=500) or None

    if 'tags' in data:
        cleaned['tags'] = _string_list(data, 'tags', 'tags', errors)

    if 'certifications' in data:
        cleaned['certifications'] = _string_list(data, 'certifications', 'certifications', errors)

    if 'yearsOfExperience' in data:
        cleaned['years_of_experience'] = _integer(data, 'yearsOfExperience', 'yearsOfExperience',
                                                  errors, 0, 50)

    if 'isTeaching' in data:
        cleaned['is_teaching'] = _boolean(data, 'isTeaching', 'isTeaching', errors)

    if 'isLearning' in data:
        cleaned['is_learning'] = _boolean(data, 'isLearning', 'isLearning', errors)

    errors.raise_if_any()
    return cleaned
