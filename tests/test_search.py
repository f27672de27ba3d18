"""
Tests for GET /api/skills/search and the ranking engine behind it.
"""

from datetime import datetime, timedelta

import pytest
from werkzeug.datastructures import MultiDict

from skillexchange.constants import SkillCategory, SkillLevel, SortBy
from skillexchange.errors import ValidationError
from skillexchange.services import search as search_module
from skillexchange.services.search import (
    SearchQuery,
    create_search_patterns,
    normalize_text,
    search,
)


def _names(entries):
    return [entry['name'] for entry in entries]


def _search(client, **params):
    resp = client.get('/api/skills/search', query_string=params)
    assert resp.status_code == 200, resp.get_json()
    body = resp.get_json()
    assert body['success'] is True
    return body['data']


@pytest.fixture
def guitar_players(make_user):
    """Two active players and one deactivated one."""
    riga = make_user(
        name='Liga Ozola', city='Riga', country='Latvia', rating=4.8, total_sessions=30,
        skills=[{'name': 'Guitar', 'category': SkillCategory.MUSIC, 'level': SkillLevel.BEGINNER,
                 'is_teaching': True, 'is_learning': False, 'years_of_experience': 2,
                 'tags': ['acoustic']}],
    )
    berlin = make_user(
        name='Jonas Weber', city='Berlin', country='Germany', rating=3.0, total_sessions=5,
        skills=[{'name': 'Guitar', 'category': SkillCategory.MUSIC, 'level': SkillLevel.EXPERT,
                 'is_teaching': False, 'is_learning': True, 'years_of_experience': 12}],
    )
    inactive = make_user(
        name='Gone Player', city='Riga', country='Latvia', rating=5.0, is_active=False,
        skills=[{'name': 'Guitar', 'category': SkillCategory.MUSIC, 'level': SkillLevel.BEGINNER}],
    )
    return {'riga': riga, 'berlin': berlin, 'inactive': inactive}


class TestTextNormalization:
    """Query text is matched case- and accent-insensitively."""

    def test_normalize_strips_accents(self):
        assert normalize_text('Café CRÈME') == 'cafe creme'

    def test_patterns_keep_phrase_and_words(self):
        assert create_search_patterns('Web  Design') == ['web design', 'web', 'design']

    def test_short_words_dropped(self):
        assert create_search_patterns('a python') == ['a python', 'python']

    def test_single_word(self):
        assert create_search_patterns('  Java ') == ['java']


class TestSearchQueryParsing:
    """SearchQuery.from_args validates everything before any query runs."""

    def test_defaults(self):
        query = SearchQuery.from_args(MultiDict())

        assert query.page == 1
        assert query.limit == 12
        assert query.sort_by == SortBy.RELEVANCE
        assert query.type.value == 'both'
        assert query.min_rating == 0.0
        assert query.levels == frozenset()

    def test_levels_repeated_and_comma_separated(self):
        query = SearchQuery.from_args(MultiDict([
            ('level', 'beginner,advanced'), ('level[]', 'expert')
        ]))

        assert query.levels == {SkillLevel.BEGINNER, SkillLevel.ADVANCED, SkillLevel.EXPERT}

    def test_all_errors_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            SearchQuery.from_args(MultiDict({
                'category': 'Cooking', 'sortBy': 'newest', 'limit': '500'
            }))

        fields = {error['field'] for error in exc_info.value.errors}
        assert fields == {'category', 'sortBy', 'limit'}

    def test_nan_rating_rejected(self):
        with pytest.raises(ValidationError):
            SearchQuery.from_args(MultiDict({'rating': 'nan'}))


class TestSearchValidation:
    """Invalid parameters answer 400 with field detail."""

    @pytest.mark.parametrize('params,field', [
        ({'category': 'Underwater Basket Weaving'}, 'category'),
        ({'level': 'guru'}, 'level'),
        ({'type': 'mentoring'}, 'type'),
        ({'sortBy': 'alphabetical'}, 'sortBy'),
        ({'rating': '5.5'}, 'rating'),
        ({'rating': '-1'}, 'rating'),
        ({'rating': 'high'}, 'rating'),
        ({'limit': '0'}, 'limit'),
        ({'limit': '101'}, 'limit'),
        ({'page': '0'}, 'page'),
    ])
    def test_invalid_parameter(self, client, db_session, params, field):
        resp = client.get('/api/skills/search', query_string=params)

        assert resp.status_code == 400
        body = resp.get_json()
        assert body['success'] is False
        assert field in [error['field'] for error in body['errors']]

    def test_invalid_query_never_reaches_store(self, client, db_session, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError('store queried')

        monkeypatch.setattr(search_module, 'find_catalog_skills', fail)
        monkeypatch.setattr(search_module, 'find_user_skills', fail)

        resp = client.get('/api/skills/search', query_string={'level': 'guru'})

        assert resp.status_code == 400


class TestCatalogRanking:
    """Ranking of catalog skills."""

    def test_java_prefers_javascript(self, client, catalog):
        data = _search(client, query='java', sortBy='relevance', page=1, limit=10)

        names = _names(data['skills'])
        assert names[0] == 'JavaScript'
        assert 'Python' not in names
        assert data['skills'][0]['relevanceScore'] > data['skills'][-1]['relevanceScore']

    def test_exact_name_beats_prefix(self, client, catalog, make_skill):
        make_skill(name='Java', category=SkillCategory.PROGRAMMING, popularity_score=50,
                   description='Object oriented language for the JVM.')

        data = _search(client, query='java', limit=10)

        assert _names(data['skills'])[:2] == ['Java', 'JavaScript']

    def test_text_matches_tags_and_description(self, client, catalog):
        data = _search(client, query='prototyping')

        assert _names(data['skills']) == ['Figma']

    def test_accent_insensitive_match(self, client, make_skill):
        make_skill(name='Café Culture', category=SkillCategory.COOKING)

        data = _search(client, query='cafe')

        assert _names(data['skills']) == ['Café Culture']

    def test_relevance_without_text_uses_popularity(self, client, catalog):
        data = _search(client)

        assert _names(data['skills']) == ['JavaScript', 'Python', 'React', 'Figma', 'English']

    def test_equal_keys_ordered_by_name_case_insensitive(self, client, make_skill):
        for name in ('cherry', 'Apple', 'banana'):
            make_skill(name=name, popularity_score=50, total_users=3)

        data = _search(client, sortBy='popularity')

        assert _names(data['skills']) == ['Apple', 'banana', 'cherry']

    def test_equal_relevance_breaks_ties_on_popularity_then_name(self, client, make_skill):
        make_skill(name='Watercolor Portraits', description='', popularity_score=40)
        make_skill(name='watercolor landscapes', description='', popularity_score=70)
        make_skill(name='Watercolor Animals', description='', popularity_score=70)

        data = _search(client, query='watercolor', sortBy='relevance')

        assert _names(data['skills']) == ['Watercolor Animals', 'watercolor landscapes', 'Watercolor Portraits']
        assert len({entry['relevanceScore'] for entry in data['skills']}) == 1

    def test_sort_by_rating_breaks_ties_on_reviews(self, client, make_skill):
        make_skill(name='Chess', avg_rating=4.5, total_reviews=10)
        make_skill(name='Go', avg_rating=4.5, total_reviews=40)
        make_skill(name='Poker', avg_rating=4.9, total_reviews=1)

        data = _search(client, sortBy='rating')

        assert _names(data['skills']) == ['Poker', 'Go', 'Chess']

    def test_sort_by_recent(self, client, make_skill):
        now = datetime.utcnow()
        make_skill(name='Old', created_at=now - timedelta(days=30))
        make_skill(name='New', created_at=now)
        make_skill(name='Middle', created_at=now - timedelta(days=3))

        data = _search(client, sortBy='recent')

        assert _names(data['skills']) == ['New', 'Middle', 'Old']

    def test_min_rating_filter(self, client, catalog):
        data = _search(client, rating='4.5')

        names = _names(data['skills'])
        assert 'Python' in names  # 4.6
        assert 'English' not in names  # 4.3
        assert all(entry['rating'] >= 4.5 for entry in data['skills'])

    def test_category_filter(self, client, catalog):
        data = _search(client, category='Design & Creative')

        assert _names(data['skills']) == ['Figma']

    def test_inactive_skills_excluded(self, client, catalog, make_skill):
        make_skill(name='Flash', is_active=False, popularity_score=99)

        data = _search(client, query='flash')

        assert data['skills'] == []
        assert data['totalSkills'] == 0

    def test_user_only_filters_leave_catalog_alone(self, client, catalog):
        data = _search(client, level='expert', type='teaching', location='Nowhere')

        assert data['totalSkills'] == 5
        assert data['totalUserSkills'] == 0


class TestUserSkillSearch:
    """Filters and ranking of users' declared skills."""

    def test_active_declarations_only(self, client, guitar_players):
        data = _search(client, query='guitar')

        assert data['totalUserSkills'] == 2
        user_ids = {entry['user']['id'] for entry in data['userSkills']}
        assert guitar_players['inactive'].id not in user_ids

    def test_level_filter(self, client, guitar_players):
        data = _search(client, query='guitar', level='beginner')

        assert [e['user']['name'] for e in data['userSkills']] == ['Liga Ozola']

    def test_multiple_levels(self, client, guitar_players):
        data = _search(client, query='guitar', level=['beginner', 'expert'])

        assert data['totalUserSkills'] == 2

    def test_type_filter(self, client, guitar_players):
        learning = _search(client, query='guitar', type='learning')
        teaching = _search(client, query='guitar', type='teaching')

        assert [e['user']['name'] for e in learning['userSkills']] == ['Jonas Weber']
        assert [e['user']['name'] for e in teaching['userSkills']] == ['Liga Ozola']

    def test_location_substring_case_insensitive(self, client, guitar_players):
        data = _search(client, query='guitar', location='RIG')

        assert [e['user']['name'] for e in data['userSkills']] == ['Liga Ozola']

    def test_location_matches_country(self, client, guitar_players):
        data = _search(client, location='germany')

        assert [e['user']['name'] for e in data['userSkills']] == ['Jonas Weber']

    def test_min_rating_uses_profile_rating(self, client, guitar_players):
        data = _search(client, query='guitar', rating='4')

        assert all(entry['rating'] >= 4 for entry in data['userSkills'])
        assert [e['user']['name'] for e in data['userSkills']] == ['Liga Ozola']

    def test_tag_match(self, client, guitar_players):
        data = _search(client, query='acoustic')

        assert [e['user']['name'] for e in data['userSkills']] == ['Liga Ozola']

    def test_location_wildcards_are_literal(self, client, guitar_players, make_user):
        make_user(name='Percent Town', city='100% Town', country='Nowhere',
                  skills=[{'name': 'Guitar', 'category': SkillCategory.MUSIC}])

        assert _search(client, location='R_ga')['totalUserSkills'] == 0
        assert [e['user']['name'] for e in _search(client, location='%')['userSkills']] == ['Percent Town']
        assert [e['user']['name'] for e in _search(client, location='100%')['userSkills']] == ['Percent Town']

    def test_sort_by_rating_breaks_ties_on_reviews_then_name(self, client, make_user):
        chess = {'name': 'Chess', 'category': SkillCategory.OTHER}
        make_user(name='Bruno Silva', rating=4.5, total_reviews=10, skills=[chess])
        make_user(name='Mara Lind', rating=4.9, total_reviews=1, skills=[chess])
        make_user(name='Carla Diaz', rating=4.5, total_reviews=30, skills=[chess])
        make_user(name='Anna Berg', rating=4.5, total_reviews=10, skills=[chess])

        data = _search(client, query='chess', sortBy='rating')

        assert [e['user']['name'] for e in data['userSkills']] == [
            'Mara Lind', 'Carla Diaz', 'Anna Berg', 'Bruno Silva'
        ]

    def test_sort_by_popularity_uses_sessions_then_reviews(self, client, make_user):
        chess = {'name': 'Chess', 'category': SkillCategory.OTHER}
        make_user(name='Dana Roe', total_sessions=20, total_reviews=1, skills=[chess])
        make_user(name='Eli Stone', total_sessions=20, total_reviews=5, skills=[chess])
        make_user(name='Finn Moor', total_sessions=50, total_reviews=0, skills=[chess])
        make_user(name='Abe Hart', total_sessions=20, total_reviews=5, skills=[chess])

        data = _search(client, query='chess', sortBy='popularity')

        assert [e['user']['name'] for e in data['userSkills']] == [
            'Finn Moor', 'Abe Hart', 'Eli Stone', 'Dana Roe'
        ]

    def test_equal_relevance_breaks_ties_on_sessions(self, client, make_user):
        chess = {'name': 'Chess', 'category': SkillCategory.OTHER}
        make_user(name='Low Sessions', total_sessions=2, skills=[chess])
        make_user(name='High Sessions', total_sessions=40, skills=[chess])

        data = _search(client, query='chess')

        assert [e['user']['name'] for e in data['userSkills']] == ['High Sessions', 'Low Sessions']

    def test_sort_by_experience(self, client, guitar_players):
        data = _search(client, query='guitar', sortBy='experience')

        assert [e['skill']['yearsOfExperience'] for e in data['userSkills']] == [12, 2]

    def test_every_declaration_is_its_own_entry(self, client, make_user):
        make_user(skills=[
            {'name': 'Spanish', 'category': SkillCategory.LANGUAGES},
            {'name': 'Spanish Cooking', 'category': SkillCategory.COOKING},
        ])

        data = _search(client, query='spanish')

        assert data['totalUserSkills'] == 2
        assert [e['skill']['name'] for e in data['userSkills']] == ['Spanish', 'Spanish Cooking']

    def test_entry_shape(self, client, guitar_players):
        entry = _search(client, query='guitar', level='beginner')['userSkills'][0]

        assert entry['user']['location'] == {'city': 'Riga', 'country': 'Latvia'}
        assert entry['skill']['level'] == 'beginner'
        assert entry['skill']['isTeaching'] is True
        assert entry['rating'] == 4.8
        assert entry['totalSessions'] == 30


class TestPagination:
    """Both result sets share page/limit; hasMore covers either."""

    def test_current_page_and_limit(self, client, catalog):
        data = _search(client, page=2, limit=2)

        assert data['currentPage'] == 2
        assert _names(data['skills']) == ['React', 'Figma']
        assert data['hasMore'] is True

    def test_last_page(self, client, catalog):
        data = _search(client, page=3, limit=2)

        assert _names(data['skills']) == ['English']
        assert data['hasMore'] is False
        assert data['totalSkills'] == 5

    def test_has_more_from_user_skills_only(self, client, make_user):
        for _ in range(3):
            make_user(skills=[{'name': 'Yoga', 'category': SkillCategory.SPORTS}])

        data = _search(client, query='yoga', limit=2)

        assert data['totalSkills'] == 0
        assert len(data['userSkills']) == 2
        assert data['hasMore'] is True

    def test_page_past_end_is_empty(self, client, catalog):
        data = _search(client, page=10, limit=5)

        assert data['skills'] == []
        assert data['currentPage'] == 10
        assert data['hasMore'] is False


class TestSearchSideEffects:
    """Searching never changes catalog rows."""

    def test_search_is_read_only(self, client, catalog):
        before = {name: (s.popularity_score, s.stats) for name, s in catalog.items()}

        _search(client, query='python', sortBy='rating')

        for name, skill in catalog.items():
            assert (skill.popularity_score, skill.stats) == before[name]

    def test_text_searches_are_counted(self, client, catalog, fake_redis):
        _search(client, query='Python')
        _search(client, query='python ')

        assert fake_redis.sorted_sets['search:popular'] == {'python': 2}

    def test_filters_echoed(self, client, catalog):
        data = _search(client, query='web', level=['expert', 'beginner'], rating='3')

        assert data['filters']['level'] == ['beginner', 'expert']
        assert data['filters']['rating'] == 3.0
        assert data['filters']['sortBy'] == 'relevance'


class TestSearchService:
    """search() can be called directly with a SearchQuery."""

    def test_direct_call(self, catalog):
        result = search(SearchQuery(text='design', limit=1))

        assert result['currentPage'] == 1
        assert len(result['skills']) <= 1
        assert result['skills'][0]['name'] == 'Figma'
