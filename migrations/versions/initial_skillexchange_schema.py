"""Create users, skills and user_skills tables

Revision ID: initial_schema_001
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial_schema_001'
down_revision = None
branch_labels = None
depends_on = None

CATEGORIES = (
    'Programming & Development', 'Design & Creative', 'Business & Marketing',
    'Data & Analytics', 'Languages', 'Music & Arts', 'Sports & Fitness',
    'Cooking & Lifestyle', 'Academic & Education', 'Crafts & DIY', 'Other',
)
LEVELS = ('beginner', 'intermediate', 'advanced', 'expert')


def _category(name):
    return sa.Enum(*CATEGORIES, name=name, native_enum=False, length=25)


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('bio', sa.String(length=500), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('linkedin', sa.String(length=500), nullable=True),
        sa.Column('github', sa.String(length=500), nullable=True),
        sa.Column('twitter', sa.String(length=500), nullable=True),
        sa.Column('available_hours', sa.JSON(), nullable=False),
        sa.Column('meeting_types', sa.JSON(), nullable=False),
        sa.Column('languages', sa.JSON(), nullable=False),
        sa.Column('max_distance', sa.Integer(), nullable=False),
        sa.Column('session_duration', sa.Integer(), nullable=False),
        sa.Column('skills_shared', sa.Integer(), nullable=False),
        sa.Column('skills_learned', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('total_sessions', sa.Integer(), nullable=False),
        sa.Column('total_reviews', sa.Integer(), nullable=False),
        sa.Column('profile_completed', sa.Boolean(), nullable=False),
        sa.Column('step_basic_info', sa.Boolean(), nullable=False),
        sa.Column('step_skills', sa.Boolean(), nullable=False),
        sa.Column('step_preferences', sa.Boolean(), nullable=False),
        sa.Column('step_avatar', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'skills',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=1000), nullable=True),
        sa.Column('category', _category('skillcategory'), nullable=False),
        sa.Column('subcategory', sa.String(length=100), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('available_levels', sa.JSON(), nullable=False),
        sa.Column('search_keywords', sa.JSON(), nullable=False),
        sa.Column('trending', sa.Boolean(), nullable=False),
        sa.Column('popularity_score', sa.Float(), nullable=False),
        sa.Column('total_users', sa.Integer(), nullable=False),
        sa.Column('teaching_users', sa.Integer(), nullable=False),
        sa.Column('learning_users', sa.Integer(), nullable=False),
        sa.Column('avg_rating', sa.Float(), nullable=False),
        sa.Column('total_sessions', sa.Integer(), nullable=False),
        sa.Column('total_reviews', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_skills_name', 'skills', ['name'], unique=True)
    op.create_index('ix_skills_category', 'skills', ['category'])
    op.create_index('ix_skills_popularity_score', 'skills', ['popularity_score'])

    op.create_table(
        'user_skills',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('category', _category('userskillcategory'), nullable=False),
        sa.Column('level', sa.Enum(*LEVELS, name='skilllevel', native_enum=False, length=12), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('certifications', sa.JSON(), nullable=False),
        sa.Column('is_teaching', sa.Boolean(), nullable=False),
        sa.Column('is_learning', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_user_skills_user_id', 'user_skills', ['user_id'])
    op.create_index('ix_user_skills_name', 'user_skills', ['name'])
    op.create_index('ix_user_skills_category', 'user_skills', ['category'])
    op.create_index('ix_user_skills_level', 'user_skills', ['level'])


def downgrade():
    op.drop_table('user_skills')
    op.drop_table('skills')
    op.drop_table('users')
