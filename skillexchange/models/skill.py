"""Skill models: the skill catalog and the skills users declare on their profiles."""

from datetime import datetime
from sqlalchemy.orm import validates
from skillexchange import db
from skillexchange.constants import SkillCategory, SkillLevel


def enum_value(value):
    """Plain string for an enum member or an already-plain string."""
    return getattr(value, 'value', value)


def enum_column(enum_cls, **kwargs):
    """String-backed enum column storing member values ('beginner', not 'BEGINNER')."""
    return db.Column(
        db.Enum(
            enum_cls,
            values_callable=lambda members: [m.value for m in members],
            native_enum=False,
            validate_strings=True,
        ),
        **kwargs
    )


class Skill(db.Model):
    """Catalog skill - seeded/admin-defined, carries aggregate statistics."""

    __tablename__ = 'skills'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)  # e.g., 'JavaScript'
    description = db.Column(db.String(1000), nullable=True)
    category = enum_column(SkillCategory, nullable=False, index=True)
    subcategory = db.Column(db.String(100), nullable=True)
    tags = db.Column(db.JSON, default=list, nullable=False)
    available_levels = db.Column(db.JSON, default=list, nullable=False)
    search_keywords = db.Column(db.JSON, default=list, nullable=False)  # suggestions only

    # Trending and popularity (assigned externally)
    trending = db.Column(db.Boolean, default=False, nullable=False)
    popularity_score = db.Column(db.Float, default=0, nullable=False, index=True)

    # Statistics, refreshed by the recompute-stats command
    total_users = db.Column(db.Integer, default=0, nullable=False)
    teaching_users = db.Column(db.Integer, default=0, nullable=False)
    learning_users = db.Column(db.Integer, default=0, nullable=False)
    avg_rating = db.Column(db.Float, default=0, nullable=False)
    total_sessions = db.Column(db.Integer, default=0, nullable=False)
    total_reviews = db.Column(db.Integer, default=0, nullable=False)

    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @validates('tags', 'search_keywords')
    def _lowercase_terms(self, key, values):
        return [v.strip().lower() for v in (values or []) if v and v.strip()]

    @property
    def stats(self):
        return {
            'totalUsers': self.total_users or 0,
            'teachingUsers': self.teaching_users or 0,
            'learningUsers': self.learning_users or 0,
            'avgRating': self.avg_rating or 0,
            'totalSessions': self.total_sessions or 0,
            'totalReviews': self.total_reviews or 0,
        }

    def to_dict(self):
        """Convert skill to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'category': enum_value(self.category),
            'subcategory': self.subcategory,
            'tags': list(self.tags or []),
            'availableLevels': list(self.available_levels or []),
            'searchKeywords': list(self.search_keywords or []),
            'trending': self.trending,
            'popularityScore': self.popularity_score,
            'stats': self.stats,
            'userCount': self.total_users or 0,
            'teachingCount': self.teaching_users or 0,
            'learningCount': self.learning_users or 0,
            'isActive': self.is_active,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat()
        }

    def __repr__(self):
        return f'<Skill {self.name}>'


class UserSkill(db.Model):
    """A skill declared on a user's profile.

    Owned by its User: created, updated and removed only through the profile
    endpoints, and always looked up together with its user_id.
    """

    __tablename__ = 'user_skills'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False, index=True)
    category = enum_column(SkillCategory, nullable=False, index=True)
    level = enum_column(SkillLevel, nullable=False, index=True)
    description = db.Column(db.String(500), nullable=True)
    tags = db.Column(db.JSON, default=list, nullable=False)
    years_of_experience = db.Column(db.Integer, nullable=True)
    certifications = db.Column(db.JSON, default=list, nullable=False)
    is_teaching = db.Column(db.Boolean, default=False, nullable=False)
    is_learning = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = db.relationship('User', back_populates='skills')

    def to_dict(self):
        """Convert user skill to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'category': enum_value(self.category),
            'level': enum_value(self.level),
            'description': self.description,
            'tags': list(self.tags or []),
            'yearsOfExperience': self.years_of_experience,
            'certifications': list(self.certifications or []),
            'isTeaching': self.is_teaching,
            'isLearning': self.is_learning,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<UserSkill user_id={self.user_id} name={self.name}>'
