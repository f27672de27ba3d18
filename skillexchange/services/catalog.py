"""Read-only views over the skill catalog: trending, per-category totals, skill detail."""

from sqlalchemy import or_

from skillexchange import db
from skillexchange.constants import SkillCategory
from skillexchange.errors import NotFoundError
from skillexchange.models import Skill, UserSkill, User
from skillexchange.models.skill import enum_value

TRENDING_DEFAULT_LIMIT = 10
TRENDING_MAX_LIMIT = 50
CATEGORY_SAMPLE_SIZE = 5
SKILL_DETAIL_USER_LIMIT = 20


def get_trending(limit=TRENDING_DEFAULT_LIMIT):
    """Trending skills first, then skills with at least one user; newest first within each group."""
    skills = Skill.query.filter(
        Skill.is_active.is_(True),
        or_(Skill.trending.is_(True), Skill.total_users >= 1)
    ).order_by(
        Skill.trending.desc(),
        Skill.created_at.desc(),
        Skill.popularity_score.desc(),
        Skill.name
    ).limit(limit).all()

    return [{
        'id': skill.id,
        'name': skill.name,
        'category': enum_value(skill.category),
        'description': skill.description,
        'userCount': skill.total_users or 0,
        'avgRating': skill.avg_rating or 0,
        'teacherCount': skill.teaching_users or 0,
        'learnerCount': skill.learning_users or 0,
        'trending': skill.trending,
        'popularityScore': skill.popularity_score,
        'createdAt': skill.created_at.isoformat()
    } for skill in skills]


def get_categories():
    """Every category of the fixed list with aggregate counts over its active skills."""
    skills = Skill.query.filter(Skill.is_active.is_(True)).order_by(Skill.name).all()

    by_category = {category: [] for category in SkillCategory}
    for skill in skills:
        by_category[SkillCategory(enum_value(skill.category))].append(skill)

    categories = []
    for order, (category, members) in enumerate(by_category.items()):
        ratings = [s.avg_rating or 0 for s in members]
        categories.append({
            'name': category.value,
            'count': len(members),
            'totalUsers': sum(s.total_users or 0 for s in members),
            'teachingUsers': sum(s.teaching_users or 0 for s in members),
            'learningUsers': sum(s.learning_users or 0 for s in members),
            'avgRating': round(sum(ratings) / len(ratings), 1) if ratings else 0,
            'skills': [s.name for s in members[:CATEGORY_SAMPLE_SIZE]],
            '_order': order,
        })

    categories.sort(key=lambda c: (-c['count'], c['_order']))
    for category in categories:
        del category['_order']
    return categories


def get_skill_detail(skill_id):
    """A catalog skill plus the users who declared a skill of the same name.

    Raises:
        NotFoundError: unknown skill id
    """
    skill = db.session.get(Skill, skill_id)
    if not skill:
        raise NotFoundError('Skill not found')

    declarations = UserSkill.query.join(User, UserSkill.user_id == User.id).filter(
        UserSkill.name == skill.name,
        User.is_active.is_(True)
    ).order_by(User.rating.desc(), UserSkill.id).all()

    # One entry per user, first declaration wins
    user_skills = []
    seen_users = set()
    for declaration in declarations:
        if declaration.user_id in seen_users:
            continue
        seen_users.add(declaration.user_id)
        user = declaration.user
        user_skills.append({
            'id': declaration.id,
            'user': {
                'id': user.id,
                'name': user.name,
                'email': user.email,
                'avatar': user.avatar,
                'location': user.location
            },
            'skill': {
                'id': skill.id,
                'name': skill.name,
                'category': enum_value(skill.category)
            },
            'level': enum_value(declaration.level),
            'isTeaching': declaration.is_teaching,
            'isLearning': declaration.is_learning,
            'yearsOfExperience': declaration.years_of_experience or 0,
            'rating': user.rating or 0
        })
        if len(user_skills) >= SKILL_DETAIL_USER_LIMIT:
            break

    skill_data = skill.to_dict()
    skill_data['rating'] = skill.avg_rating or 0

    return {
        'skill': skill_data,
        'userSkills': user_skills,
        'userCount': len(user_skills)
    }
