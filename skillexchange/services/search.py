"""Skill search and ranking across the catalog and users' declared skills.

One query produces two independently ranked and paginated result sets:

- skills: catalog entries (inactive skills never appear)
- userSkills: individual skills declared on active user profiles

Text matching is case- and diacritic-insensitive substring matching, scored so
that name hits outrank tag hits, which outrank description hits. Filters that
only make sense for one side (levels, type, location) leave the other side
untouched. Searching never writes to the database.
"""

import logging
import unicodedata

from sqlalchemy import or_
from sqlalchemy.orm import contains_eager

from skillexchange.constants import (
    SkillCategory,
    SkillLevel,
    SearchType,
    SortBy,
    parse_enum,
)
from skillexchange.errors import ValidationError
from skillexchange.models import Skill, UserSkill, User

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 12
MAX_LIMIT = 100
MIN_RATING = 0.0
MAX_RATING = 5.0

# Relevance weights per pattern hit
NAME_EXACT = 10.0
NAME_PREFIX = 6.0
NAME_CONTAINS = 4.0
TAG_EXACT = 3.0
TAG_CONTAINS = 1.5
DESCRIPTION_CONTAINS = 1.0


def normalize_text(text):
    """Lowercase and strip diacritics: 'Café' -> 'cafe'."""
    if not text:
        return ''
    decomposed = unicodedata.normalize('NFKD', text.lower())
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def create_search_patterns(search_query):
    """Split a query into normalized patterns.

    Every word of at least 2 characters becomes a pattern; a multi-word query
    also keeps the whole phrase so exact phrase hits score higher.
    """
    phrase = ' '.join(normalize_text(search_query).split())
    words = [w for w in phrase.split() if len(w) >= 2]

    patterns = []
    if phrase and (len(words) != 1 or words[0] != phrase):
        patterns.append(phrase)
    for word in words:
        if word not in patterns:
            patterns.append(word)

    return patterns


def _name_score(name, pattern):
    if name == pattern:
        return NAME_EXACT
    if name.startswith(pattern):
        return NAME_PREFIX
    if pattern in name:
        return NAME_CONTAINS
    return 0.0


def _tags_score(tags, pattern):
    best = 0.0
    for tag in tags:
        if tag == pattern:
            return TAG_EXACT
        if pattern in tag:
            best = TAG_CONTAINS
    return best


def score_catalog_skill(skill, patterns):
    """Relevance of a catalog skill against the patterns (name, tags, description). 0 = no match."""
    name = normalize_text(skill.name)
    tags = [normalize_text(t) for t in (skill.tags or [])]
    description = normalize_text(skill.description)

    score = 0.0
    for pattern in patterns:
        score += _name_score(name, pattern)
        score += _tags_score(tags, pattern)
        if pattern in description:
            score += DESCRIPTION_CONTAINS
    return score


def score_user_skill(user_skill, patterns):
    """Relevance of a declared skill against the patterns (name and tags only)."""
    name = normalize_text(user_skill.name)
    tags = [normalize_text(t) for t in (user_skill.tags or [])]

    score = 0.0
    for pattern in patterns:
        score += _name_score(name, pattern)
        score += _tags_score(tags, pattern)
    return score


class SearchQuery:
    """Validated search parameters."""

    def __init__(self, text='', category=None, levels=None, type=SearchType.BOTH,
                 location='', min_rating=0.0, sort_by=SortBy.RELEVANCE,
                 page=1, limit=DEFAULT_LIMIT):
        self.text = (text or '').strip()
        self.category = category
        self.levels = frozenset(levels or ())
        self.type = type
        self.location = (location or '').strip()
        self.min_rating = min_rating
        self.sort_by = sort_by
        self.page = page
        self.limit = limit

    @classmethod
    def from_args(cls, args, default_limit=DEFAULT_LIMIT):
        """Build a query from request query-string arguments.

        Accepts: query, category, level (repeated, 'level[]' or comma separated),
        type, location, rating, sortBy, page, limit.

        Raises:
            ValidationError listing every invalid field; nothing is queried.
        """
        errors = []

        def collect(parse):
            try:
                return parse()
            except ValidationError as e:
                errors.extend(e.errors)
                return None

        category = None
        raw_category = (args.get('category') or '').strip()
        if raw_category:
            category = collect(lambda: parse_enum(SkillCategory, raw_category, 'category'))

        raw_levels = []
        for key in ('level', 'level[]', 'levels'):
            for value in args.getlist(key):
                raw_levels.extend(v.strip() for v in value.split(',') if v.strip())
        levels = [collect(lambda v=v: parse_enum(SkillLevel, v, 'level')) for v in raw_levels]

        search_type = collect(lambda: parse_enum(SearchType, args.get('type') or 'both', 'type'))
        sort_by = collect(lambda: parse_enum(SortBy, args.get('sortBy') or 'relevance', 'sortBy'))

        min_rating = _parse_number(args.get('rating'), float, 'rating', MIN_RATING, MAX_RATING,
                                   default=0.0, errors=errors)
        page = _parse_number(args.get('page'), int, 'page', 1, None,
                             default=1, errors=errors)
        limit = _parse_number(args.get('limit'), int, 'limit', 1, MAX_LIMIT,
                              default=default_limit, errors=errors)

        if errors:
            raise ValidationError('Validation errors', errors=errors)

        return cls(
            text=args.get('query', ''),
            category=category,
            levels=levels,
            type=search_type,
            location=args.get('location', ''),
            min_rating=min_rating,
            sort_by=sort_by,
            page=page,
            limit=limit,
        )

    @property
    def offset(self):
        return (self.page - 1) * self.limit

    def to_dict(self):
        return {
            'query': self.text,
            'category': self.category.value if self.category else '',
            'level': sorted(level.value for level in self.levels),
            'type': self.type.value,
            'location': self.location,
            'rating': self.min_rating,
            'sortBy': self.sort_by.value,
        }


def _parse_number(raw, cast, field, minimum, maximum, default, errors):
    if raw is None or str(raw).strip() == '':
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        errors.append({'field': field, 'message': f'{field} must be a valid number', 'value': raw})
        return default
    if value != value:  # NaN
        errors.append({'field': field, 'message': f'{field} must be a valid number', 'value': raw})
        return default
    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        if maximum is None:
            message = f'{field} must be at least {minimum}'
        else:
            message = f'{field} must be between {minimum} and {maximum}'
        errors.append({'field': field, 'message': message, 'value': raw})
        return default
    return value


# ---------------------------------------------------------------------------
# Ranking keys. Every key ends with the case-insensitive name, then the id,
# so equal primary keys always come back in the same order.
# ---------------------------------------------------------------------------

def _timestamp(dt):
    return dt.timestamp() if dt else 0.0


def catalog_sort_key(sort_by, has_text):
    if sort_by == SortBy.RELEVANCE and has_text:
        return lambda item: (-item[1], -(item[0].popularity_score or 0), item[0].name.lower(), item[0].id)
    if sort_by == SortBy.RATING:
        return lambda item: (-(item[0].avg_rating or 0), -(item[0].total_reviews or 0),
                             item[0].name.lower(), item[0].id)
    if sort_by == SortBy.RECENT:
        return lambda item: (-_timestamp(item[0].created_at), item[0].name.lower(), item[0].id)
    # popularity; also relevance without text and experience (catalog has no years)
    return lambda item: (-(item[0].popularity_score or 0), -(item[0].total_users or 0),
                         item[0].name.lower(), item[0].id)


def user_skill_sort_key(sort_by, has_text):
    def name_key(user_skill):
        return (user_skill.name.lower(), user_skill.user.name.lower(), user_skill.id)

    if sort_by == SortBy.RELEVANCE and has_text:
        return lambda item: (-item[1], -(item[0].user.total_sessions or 0)) + name_key(item[0])
    if sort_by == SortBy.RATING:
        return lambda item: (-(item[0].user.rating or 0), -(item[0].user.total_reviews or 0)) + name_key(item[0])
    if sort_by == SortBy.RECENT:
        return lambda item: (-_timestamp(item[0].created_at),) + name_key(item[0])
    if sort_by == SortBy.EXPERIENCE:
        return lambda item: (-(item[0].years_of_experience or 0),) + name_key(item[0])
    return lambda item: (-(item[0].user.total_sessions or 0), -(item[0].user.total_reviews or 0)) + name_key(item[0])


# ---------------------------------------------------------------------------
# Result sets
# ---------------------------------------------------------------------------

def find_catalog_skills(search_query, patterns):
    """Return [(skill, score)] for the catalog side, unsorted."""
    query = Skill.query.filter(Skill.is_active.is_(True))

    if search_query.category:
        query = query.filter(Skill.category == search_query.category)

    if search_query.min_rating > 0:
        query = query.filter(Skill.avg_rating >= search_query.min_rating)

    candidates = query.all()
    if not patterns:
        return [(skill, 0.0) for skill in candidates]

    matches = []
    for skill in candidates:
        score = score_catalog_skill(skill, patterns)
        if score > 0:
            matches.append((skill, score))
    return matches


def find_user_skills(search_query, patterns):
    """Return [(user_skill, score)] for the declared-skills side, unsorted."""
    query = UserSkill.query.join(User, UserSkill.user_id == User.id) \
        .options(contains_eager(UserSkill.user)) \
        .filter(User.is_active.is_(True))

    if search_query.category:
        query = query.filter(UserSkill.category == search_query.category)

    if search_query.levels:
        query = query.filter(UserSkill.level.in_(list(search_query.levels)))

    if search_query.type == SearchType.TEACHING:
        query = query.filter(UserSkill.is_teaching.is_(True))
    elif search_query.type == SearchType.LEARNING:
        query = query.filter(UserSkill.is_learning.is_(True))

    if search_query.location:
        query = query.filter(or_(
            User.city.icontains(search_query.location, autoescape=True),
            User.country.icontains(search_query.location, autoescape=True)
        ))

    if search_query.min_rating > 0:
        query = query.filter(User.rating >= search_query.min_rating)

    candidates = query.all()
    if not patterns:
        return [(user_skill, 0.0) for user_skill in candidates]

    matches = []
    for user_skill in candidates:
        score = score_user_skill(user_skill, patterns)
        if score > 0:
            matches.append((user_skill, score))
    return matches


def format_catalog_result(skill, score):
    result = skill.to_dict()
    result.update({
        'rating': skill.avg_rating or 0,
        'isTeaching': (skill.teaching_users or 0) > 0,
        'isLearning': (skill.learning_users or 0) > 0,
        'relevanceScore': score,
    })
    return result


def format_user_skill_result(user_skill, score):
    user = user_skill.user
    return {
        'id': user_skill.id,
        'user': user.to_summary_dict(),
        'skill': user_skill.to_dict(),
        'rating': user.rating or 0,
        'totalSessions': user.total_sessions or 0,
        'totalReviews': user.total_reviews or 0,
        'relevanceScore': score,
        'createdAt': user_skill.created_at.isoformat() if user_skill.created_at else None,
    }


def _paginate(items, search_query):
    start = search_query.offset
    end = start + search_query.limit
    return items[start:end], end < len(items)


def search(search_query):
    """Run a validated SearchQuery and build the response payload."""
    patterns = create_search_patterns(search_query.text) if search_query.text else []
    has_text = bool(patterns)

    logger.info(f'Searching skills: query="{search_query.text}", sortBy={search_query.sort_by.value}, '
                f'page={search_query.page}, limit={search_query.limit}')

    catalog = find_catalog_skills(search_query, patterns)
    catalog.sort(key=catalog_sort_key(search_query.sort_by, has_text))

    declared = find_user_skills(search_query, patterns)
    declared.sort(key=user_skill_sort_key(search_query.sort_by, has_text))

    skills_page, skills_more = _paginate(catalog, search_query)
    user_skills_page, user_skills_more = _paginate(declared, search_query)

    logger.info(f'Search matched {len(catalog)} catalog skills and {len(declared)} user skills')

    return {
        'skills': [format_catalog_result(skill, score) for skill, score in skills_page],
        'userSkills': [format_user_skill_result(us, score) for us, score in user_skills_page],
        'totalSkills': len(catalog),
        'totalUserSkills': len(declared),
        'currentPage': search_query.page,
        'hasMore': skills_more or user_skills_more,
        'filters': search_query.to_dict(),
    }
