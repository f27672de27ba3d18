"""Profile routes: own profile CRUD and declared-skill management.

Every mutation recomputes profile completion before the commit.
"""

import logging

from flask import Blueprint, request

from skillexchange import db
from skillexchange.constants import CATEGORY_NAMES, LEVEL_NAMES
from skillexchange.errors import ConflictError, NotFoundError
from skillexchange.models import User, UserSkill
from skillexchange.models.skill import enum_value
from skillexchange.services.completion import apply_completion
from skillexchange.utils import token_required, success_response
from skillexchange.utils.validators import MAX_ID, validate_profile_update, validate_user_skill

logger = logging.getLogger(__name__)

profile_bp = Blueprint('profile', __name__)


def _get_user(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError('User not found')
    return user


def _get_user_skill(user, skill_id):
    """Declared skills are only ever looked up through their owner."""
    user_skill = UserSkill.query.filter_by(id=skill_id, user_id=user.id).first()
    if not user_skill:
        raise NotFoundError('Skill not found')
    return user_skill


def _has_duplicate(user, name, category, exclude_id=None):
    return any(
        s.id != exclude_id
        and s.name.lower() == name.lower()
        and enum_value(s.category) == enum_value(category)
        for s in user.skills
    )


def _skills_payload(user, percentage):
    return {
        'skills': [skill.to_dict() for skill in user.skills],
        'profileCompletion': percentage
    }


@profile_bp.route('', methods=['GET'])
@token_required
def get_profile(current_user_id):
    """Get current user profile."""
    user = _get_user(current_user_id)

    return success_response({
        'user': user.to_dict(),
        'profileCompletion': user.profile_completion_percentage
    })


@profile_bp.route('', methods=['PUT'])
@token_required
def update_profile(current_user_id):
    """Update current user profile (partial update)."""
    user = _get_user(current_user_id)

    # Validate all fields before applying any changes
    cleaned = validate_profile_update(request.get_json(silent=True))

    for attribute, value in cleaned.items():
        setattr(user, attribute, value)

    percentage = apply_completion(user)
    db.session.commit()

    logger.info(f'Profile {user.id} updated: {sorted(cleaned)} (completion {percentage}%)')

    return success_response({
        'user': user.to_dict(),
        'profileCompletion': percentage
    }, message='Profile updated successfully')


@profile_bp.route('', methods=['DELETE'])
@token_required
def delete_account(current_user_id):
    """Delete the current account and its declared skills."""
    user = _get_user(current_user_id)

    db.session.delete(user)
    db.session.commit()

    logger.info(f'Account {current_user_id} deleted')

    return success_response(message='Account deleted successfully')


@profile_bp.route('/categories', methods=['GET'])
def get_categories():
    """The fixed lists of skill categories and levels."""
    return success_response({'categories': CATEGORY_NAMES, 'levels': LEVEL_NAMES})


@profile_bp.route('/skills', methods=['POST'])
@token_required
def add_skill(current_user_id):
    """Add a skill to current user's profile."""
    user = _get_user(current_user_id)
    cleaned = validate_user_skill(request.get_json(silent=True))

    if _has_duplicate(user, cleaned['name'], cleaned['category']):
        raise ConflictError('Skill already exists')

    cleaned.setdefault('tags', [])
    cleaned.setdefault('certifications', [])
    user.skills.append(UserSkill(**cleaned))

    percentage = apply_completion(user)
    db.session.commit()

    return success_response(
        _skills_payload(user, percentage),
        message='Skill added successfully',
        status=201
    )


@profile_bp.route(f'/skills/<int(max={MAX_ID}):skill_id>', methods=['PUT'])
@token_required
def update_skill(current_user_id, skill_id):
    """Update one of the current user's skills."""
    user = _get_user(current_user_id)
    user_skill = _get_user_skill(user, skill_id)
    cleaned = validate_user_skill(request.get_json(silent=True), partial=True)

    name = cleaned.get('name', user_skill.name)
    category = cleaned.get('category', user_skill.category)
    if _has_duplicate(user, name, category, exclude_id=user_skill.id):
        raise ConflictError('Skill already exists')

    for attribute, value in cleaned.items():
        setattr(user_skill, attribute, value)

    percentage = apply_completion(user)
    db.session.commit()

    return success_response(
        _skills_payload(user, percentage),
        message='Skill updated successfully'
    )


@profile_bp.route(f'/skills/<int(max={MAX_ID}):skill_id>', methods=['DELETE'])
@token_required
def delete_skill(current_user_id, skill_id):
    """Remove a skill from current user's profile."""
    user = _get_user(current_user_id)
    user_skill = _get_user_skill(user, skill_id)

    user.skills.remove(user_skill)

    percentage = apply_completion(user)
    db.session.commit()

    return success_response(
        _skills_payload(user, percentage),
        message='Skill deleted successfully'
    )
