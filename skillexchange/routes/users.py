"""Public user profiles."""

from flask import Blueprint

from skillexchange import db
from skillexchange.errors import NotFoundError
from skillexchange.models import User
from skillexchange.utils import token_required, success_response
from skillexchange.utils.validators import MAX_ID

users_bp = Blueprint('users', __name__)


@users_bp.route(f'/<int(max={MAX_ID}):user_id>', methods=['GET'])
@token_required
def get_user_by_id(current_user_id, user_id):
    """Get another user's public profile, with skills split by teaching/learning."""
    user = db.session.get(User, user_id)

    if not user or not user.is_active:
        raise NotFoundError('User not found')

    skills = [skill.to_dict() for skill in user.skills]

    return success_response({
        'id': user.id,
        'name': user.name,
        'avatar': user.avatar,
        'bio': user.bio,
        'location': user.location,
        'skills': skills,
        'teachingSkills': [s for s in skills if s['isTeaching']],
        'learningSkills': [s for s in skills if s['isLearning']],
        'preferences': user.preferences,
        'stats': user.stats,
        'profileCompletionPercentage': user.profile_completion_percentage,
        'isActive': user.is_active,
        'joinedDate': user.created_at.isoformat(),
        'contactInfo': {
            'website': user.website,
            'linkedin': user.linkedin,
            'github': user.github,
            'twitter': user.twitter
        }
    })
