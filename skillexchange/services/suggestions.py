"""Search suggestions and popular searches."""

import logging

from skillexchange.models import Skill
from skillexchange.models.skill import enum_value
from skillexchange.services import redis_client
from skillexchange.services.search import normalize_text

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 10


def get_suggestions(q, limit=DEFAULT_LIMIT):
    """Catalog names and search keywords containing q, most popular skill first.

    Returns [] for queries shorter than 2 characters. Each text appears once,
    the first time it is seen in popularity order.
    """
    term = normalize_text((q or '').strip())
    if len(term) < MIN_QUERY_LENGTH:
        return []

    skills = Skill.query.filter(Skill.is_active.is_(True)).all()
    skills.sort(key=lambda s: (-(s.popularity_score or 0), -(s.total_users or 0), s.name.lower(), s.id))

    suggestions = []
    seen = set()

    def add(text, kind, skill):
        key = normalize_text(text)
        if key in seen:
            return
        seen.add(key)
        suggestions.append({
            'text': text,
            'type': kind,
            'category': enum_value(skill.category),
            'userCount': skill.total_users or 0,
        })

    for skill in skills:
        if term in normalize_text(skill.name):
            add(skill.name, 'skill', skill)
        for keyword in skill.search_keywords or []:
            if term in normalize_text(keyword):
                add(keyword, 'keyword', skill)
        if len(suggestions) >= limit:
            break

    return suggestions[:limit]


def record_search(text):
    """Count a user-issued query towards popular searches. No-op without Redis."""
    term = normalize_text((text or '').strip())
    if len(term) < MIN_QUERY_LENGTH:
        return False
    recorded = redis_client.increment_search_term(term)
    if recorded:
        logger.debug(f'Recorded search term "{term}"')
    return recorded


def get_popular_searches(limit=DEFAULT_LIMIT):
    """Top searched terms, or the most used catalog skills when nothing was recorded."""
    terms = redis_client.get_top_search_terms(limit)
    if terms:
        return terms

    popular = Skill.query.filter(
        Skill.is_active.is_(True),
        Skill.total_users >= 1
    ).order_by(
        Skill.total_users.desc(),
        Skill.popularity_score.desc(),
        Skill.name
    ).limit(limit).all()

    return [skill.name for skill in popular]
