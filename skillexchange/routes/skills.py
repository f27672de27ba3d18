"""Skill catalog and search routes. All public."""

import logging

from flask import Blueprint, request, current_app

from skillexchange.errors import NotFoundError, ValidationError
from skillexchange.services import catalog, suggestions
from skillexchange.services.search import SearchQuery, search
from skillexchange.utils import success_response
from skillexchange.utils.validators import MAX_ID

logger = logging.getLogger(__name__)

skills_bp = Blueprint('skills', __name__)


@skills_bp.route('/search', methods=['GET'])
def search_skills():
    """Search catalog skills and users' declared skills.

    Query params:
        - query: free text
        - category: exact category name
        - level: one or more of beginner/intermediate/advanced/expert
        - type: teaching, learning or both (default both)
        - location: city/country substring
        - rating: minimum rating, 0-5
        - sortBy: relevance, rating, popularity, recent, experience
        - page (>= 1), limit (1-100, default 12)
    """
    search_query = SearchQuery.from_args(
        request.args,
        default_limit=current_app.config['SEARCH_DEFAULT_LIMIT']
    )

    results = search(search_query)

    if search_query.text:
        suggestions.record_search(search_query.text)

    return success_response(results)


@skills_bp.route('/trending', methods=['GET'])
def get_trending_skills():
    """Get trending skills (limit 1-50, default 10)."""
    limit = request.args.get('limit', catalog.TRENDING_DEFAULT_LIMIT)
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        raise ValidationError.for_field('limit', 'limit must be a valid integer', limit)
    if limit < 1 or limit > catalog.TRENDING_MAX_LIMIT:
        raise ValidationError.for_field(
            'limit', f'limit must be between 1 and {catalog.TRENDING_MAX_LIMIT}', limit
        )

    return success_response(catalog.get_trending(limit))


@skills_bp.route('/categories', methods=['GET'])
def get_skill_categories():
    """Get every category with per-category aggregate counts."""
    return success_response(catalog.get_categories())


@skills_bp.route('/suggestions', methods=['GET'])
def get_search_suggestions():
    """Get name/keyword suggestions for a partial query (q, at least 2 characters)."""
    q = (request.args.get('q') or '').strip()
    if len(q) < suggestions.MIN_QUERY_LENGTH:
        raise ValidationError.for_field(
            'q', f'q must be at least {suggestions.MIN_QUERY_LENGTH} characters', q
        )

    return success_response(
        suggestions.get_suggestions(q, limit=current_app.config['SUGGESTIONS_LIMIT'])
    )


@skills_bp.route('/popular-searches', methods=['GET'])
def get_popular_searches():
    """Get the most searched terms."""
    return success_response(
        suggestions.get_popular_searches(limit=current_app.config['POPULAR_SEARCHES_LIMIT'])
    )


@skills_bp.route('/<skill_id>', methods=['GET'])
def get_skill(skill_id):
    """Get a catalog skill with the users who declared it."""
    try:
        skill_id = int(skill_id)
    except ValueError:
        raise ValidationError.for_field('skillId', 'Invalid skill ID', skill_id)
    if skill_id < 1 or skill_id > MAX_ID:
        raise NotFoundError('Skill not found')

    return success_response(catalog.get_skill_detail(skill_id))
