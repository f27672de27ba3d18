"""Skill statistics recomputation.

Catalog stats are not kept up to date by profile edits. They are rebuilt by a
full scan of all profiles, run out of band (see `flask recompute-stats`).
"""

import logging
import time

from skillexchange import db
from skillexchange.errors import NotFoundError
from skillexchange.models import Skill, UserSkill, User

logger = logging.getLogger(__name__)


def compute_skill_stats(skill_name):
    """Scan every profile for declarations of skill_name.

    Returns:
        dict with totalUsers, teachingUsers, learningUsers and avgRating.
        avgRating is the mean of the declaring profiles' ratings that are > 0,
        counted once per matching declaration; None when there are none.
    """
    user_ids = [user_id for (user_id,) in db.session.query(UserSkill.user_id).filter(
        UserSkill.name == skill_name
    ).distinct().all()]
    users = User.query.filter(User.id.in_(user_ids)).order_by(User.id).all() if user_ids else []

    teaching = 0
    learning = 0
    ratings = []
    for user in users:
        matching = [s for s in user.skills if s.name == skill_name]
        if any(s.is_teaching for s in matching):
            teaching += 1
        if any(s.is_learning for s in matching):
            learning += 1
        if (user.rating or 0) > 0:
            ratings.extend(user.rating for _ in matching)

    return {
        'totalUsers': len(users),
        'teachingUsers': teaching,
        'learningUsers': learning,
        'avgRating': sum(ratings) / len(ratings) if ratings else None,
    }


def recompute_skill_stats(skill_name):
    """Recompute and persist the stats of one catalog skill. Idempotent.

    Raises:
        NotFoundError: no catalog skill has this name
    """
    skill = Skill.query.filter_by(name=skill_name).first()
    if not skill:
        raise NotFoundError(f'Skill not found: {skill_name}')

    stats = compute_skill_stats(skill.name)
    skill.total_users = stats['totalUsers']
    skill.teaching_users = stats['teachingUsers']
    skill.learning_users = stats['learningUsers']
    # No positive ratings: keep the previous average
    if stats['avgRating'] is not None:
        skill.avg_rating = stats['avgRating']

    db.session.commit()
    logger.info(f'Recomputed stats for {skill.name}: {stats}')
    return skill.stats


def recompute_all(timeout_seconds=300, clock=time.monotonic):
    """Recompute every catalog skill until the time budget runs out.

    Stops between skills, never in the middle of one.

    Returns:
        dict with 'processed', 'total' and 'timedOut'.
    """
    deadline = clock() + timeout_seconds
    names = [name for (name,) in db.session.query(Skill.name).order_by(Skill.name).all()]

    processed = 0
    for name in names:
        if clock() >= deadline:
            logger.warning(f'Stats recomputation timed out after {processed}/{len(names)} skills')
            return {'processed': processed, 'total': len(names), 'timedOut': True}
        recompute_skill_stats(name)
        processed += 1

    logger.info(f'Stats recomputation finished: {processed} skills')
    return {'processed': processed, 'total': len(names), 'timedOut': False}
