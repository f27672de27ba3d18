#!/usr/bin/env python3
"""Seed the skill catalog with the predefined skills.

Existing skills (matched by name) are updated in place; stats are only set
on newly created skills so a later recompute-stats run is not overwritten.
"""

import sys
import os

# Add parent directory to path to import skillexchange modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from skillexchange import create_app, db
from skillexchange.constants import SkillCategory
from skillexchange.models import Skill
from skillexchange.seed_data import SKILLS_DATA


def seed_skills(app=None):
    """Upsert every skill of SKILLS_DATA. Returns (added, updated)."""
    app = app or create_app(os.getenv('FLASK_ENV', 'development'))

    with app.app_context():
        existing_count = Skill.query.count()
        print(f"Found {existing_count} existing skills")

        added_count = 0
        updated_count = 0

        for skill_data in SKILLS_DATA:
            fields = {k: v for k, v in skill_data.items() if k != 'stats'}
            fields['category'] = SkillCategory(fields['category'])

            existing_skill = Skill.query.filter_by(name=skill_data['name']).first()

            if existing_skill:
                for attribute, value in fields.items():
                    setattr(existing_skill, attribute, value)
                existing_skill.is_active = True
                updated_count += 1
                print(f"  Updated: {skill_data['name']}")
            else:
                db.session.add(Skill(is_active=True, **fields, **skill_data.get('stats', {})))
                added_count += 1
                print(f"  Added: {skill_data['name']}")

        db.session.commit()

        total_count = Skill.query.count()
        print("\n" + "=" * 50)
        print("Skills seeding completed!")
        print(f"Added: {added_count} new skills")
        print(f"Updated: {updated_count} existing skills")
        print(f"Total skills in database: {total_count}")
        print("=" * 50)

        return added_count, updated_count


if __name__ == '__main__':
    seed_skills()
