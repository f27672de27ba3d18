"""
Tests for the catalog endpoints: trending, categories and skill detail.
"""

from datetime import datetime, timedelta

import pytest

from skillexchange.constants import CATEGORY_NAMES, SkillCategory, SkillLevel


class TestTrending:
    """GET /api/skills/trending"""

    def test_trending_first_then_newest(self, client, make_skill):
        now = datetime.utcnow()
        make_skill(name='Old Trend', trending=True, created_at=now - timedelta(days=10))
        make_skill(name='New Trend', trending=True, created_at=now - timedelta(days=1))
        make_skill(name='Fresh', total_users=3, created_at=now)
        make_skill(name='Nobody', total_users=0, created_at=now)
        make_skill(name='Retired', trending=True, is_active=False, created_at=now)

        resp = client.get('/api/skills/trending')

        assert resp.status_code == 200
        names = [s['name'] for s in resp.get_json()['data']]
        assert names == ['New Trend', 'Old Trend', 'Fresh']

    def test_limit(self, client, catalog):
        resp = client.get('/api/skills/trending', query_string={'limit': 2})

        assert len(resp.get_json()['data']) == 2

    def test_entry_fields(self, client, catalog):
        entry = client.get('/api/skills/trending', query_string={'limit': 50}).get_json()['data'][0]

        assert set(entry) >= {'id', 'name', 'category', 'userCount', 'avgRating',
                              'teacherCount', 'learnerCount', 'trending'}

    @pytest.mark.parametrize('limit', ['0', '51', 'many'])
    def test_invalid_limit(self, client, db_session, limit):
        resp = client.get('/api/skills/trending', query_string={'limit': limit})

        assert resp.status_code == 400
        assert resp.get_json()['errors'][0]['field'] == 'limit'


class TestCategories:
    """GET /api/skills/categories"""

    def test_every_category_listed(self, client, catalog):
        data = client.get('/api/skills/categories').get_json()['data']

        assert sorted(c['name'] for c in data) == sorted(CATEGORY_NAMES)

    def test_ordered_by_count_then_fixed_order(self, client, catalog):
        data = client.get('/api/skills/categories').get_json()['data']

        assert [c['name'] for c in data[:3]] == [
            'Programming & Development', 'Design & Creative', 'Languages'
        ]
        assert [c['name'] for c in data[3:]] == [
            name for name in CATEGORY_NAMES
            if name not in ('Programming & Development', 'Design & Creative', 'Languages')
        ]

    def test_aggregates(self, client, catalog):
        data = client.get('/api/skills/categories').get_json()['data']
        programming = data[0]

        assert programming['count'] == 3
        assert programming['totalUsers'] == 1245 + 1156 + 987
        assert programming['avgRating'] == 4.5
        assert programming['skills'] == ['JavaScript', 'Python', 'React']

    def test_empty_category_reports_zeros(self, client, catalog):
        data = client.get('/api/skills/categories').get_json()['data']
        crafts = next(c for c in data if c['name'] == 'Crafts & DIY')

        assert crafts == {
            'name': 'Crafts & DIY', 'count': 0, 'totalUsers': 0, 'teachingUsers': 0,
            'learningUsers': 0, 'avgRating': 0, 'skills': []
        }

    def test_profile_category_list(self, client, db_session):
        data = client.get('/api/profile/categories').get_json()['data']

        assert data['categories'] == CATEGORY_NAMES
        assert data['levels'] == ['beginner', 'intermediate', 'advanced', 'expert']


class TestSkillDetail:
    """GET /api/skills/<id>"""

    def test_detail_with_users(self, client, catalog, make_user):
        python = {'name': 'Python', 'category': SkillCategory.PROGRAMMING,
                  'level': SkillLevel.EXPERT, 'years_of_experience': 8}
        low = make_user(name='Low Rated', rating=3.1, skills=[python])
        high = make_user(name='High Rated', rating=4.9, skills=[python])
        make_user(name='Inactive', rating=5.0, is_active=False, skills=[python])

        resp = client.get(f"/api/skills/{catalog['Python'].id}")

        assert resp.status_code == 200
        data = resp.get_json()['data']
        assert data['skill']['name'] == 'Python'
        assert data['skill']['rating'] == 4.6
        assert [u['user']['id'] for u in data['userSkills']] == [high.id, low.id]
        assert data['userSkills'][0]['level'] == 'expert'
        assert data['userSkills'][0]['yearsOfExperience'] == 8
        assert data['userCount'] == 2

    def test_unknown_id(self, client, db_session):
        resp = client.get('/api/skills/999999')

        assert resp.status_code == 404
        body = resp.get_json()
        assert body['success'] is False
        assert body['message'] == 'Skill not found'

    def test_malformed_id(self, client, db_session):
        resp = client.get('/api/skills/not-a-number')

        assert resp.status_code == 400

    @pytest.mark.parametrize('skill_id', ['99999999999999999999999', '-3', '0'])
    def test_out_of_range_id(self, client, db_session, skill_id):
        resp = client.get(f'/api/skills/{skill_id}')

        assert resp.status_code == 404
        assert resp.get_json()['message'] == 'Skill not found'
