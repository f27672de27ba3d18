#!/usr/bin/env python
"""Database initialization script for the SkillExchange backend.

Creates all tables from the SQLAlchemy models and, with --seed, loads the
skill catalog. Production databases are managed with `flask db upgrade`.

Usage:
    python init_db.py [--seed]
"""

import os
import sys
from skillexchange import create_app, db


def init_database(seed=False):
    """Initialize the database by creating all tables."""

    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print("Creating database tables...")
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")

            db.create_all()

            tables_info = [
                ("users", "Accounts, profiles, preferences and completion"),
                ("skills", "Skill catalog with aggregate statistics"),
                ("user_skills", "Skills declared on user profiles"),
            ]

            print("Created tables:")
            for table_name, description in tables_info:
                print(f"  - {table_name:<15} {description}")
            print()

        except Exception as e:
            print(f"Error creating database: {type(e).__name__}: {e}\n")
            return False

    if seed:
        from scripts.seed_skills import seed_skills
        seed_skills(app)

    print("Next steps:")
    print("  1. Start the Flask server: python wsgi.py")
    print("  2. Refresh skill statistics: flask --app wsgi recompute-stats")
    print()
    return True


if __name__ == '__main__':
    success = init_database(seed='--seed' in sys.argv[1:])
    sys.exit(0 if success else 1)
