"""Profile completion tracking.

A profile is complete when all four steps are done:
- basicInfo: name, bio, city and country are all non-empty
- skills: at least one declared skill
- preferences: at least one meeting type and one language
- avatar: an avatar reference is set

Runs synchronously on every profile or skill mutation, before commit.
"""

from skillexchange.models.user import COMPLETION_STEPS


def _filled(value):
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def compute_completion(user):
    """Derive completion flags from the current state of a profile.

    Pure: reads the profile, never modifies it.

    Returns:
        dict with the four step flags, 'profileCompleted' and
        'profileCompletionPercentage' (0, 25, 50, 75 or 100).
    """
    steps = {
        'basicInfo': all(_filled(v) for v in (user.name, user.bio, user.city, user.country)),
        'skills': len(user.skills or []) > 0,
        'preferences': bool(user.meeting_types) and bool(user.languages),
        'avatar': _filled(user.avatar),
    }
    completed = sum(1 for step in COMPLETION_STEPS if steps[step])

    return {
        **steps,
        'profileCompleted': completed == len(COMPLETION_STEPS),
        'profileCompletionPercentage': round(100 * completed / len(COMPLETION_STEPS)),
    }


def apply_completion(user):
    """Recompute and store the completion flags on a user. Returns the percentage."""
    result = compute_completion(user)

    user.step_basic_info = result['basicInfo']
    user.step_skills = result['skills']
    user.step_preferences = result['preferences']
    user.step_avatar = result['avatar']
    user.profile_completed = result['profileCompleted']

    return result['profileCompletionPercentage']
