"""User model: account, public profile, preferences and profile completion."""

from datetime import datetime
from sqlalchemy.orm import validates
from werkzeug.security import generate_password_hash, check_password_hash
from skillexchange import db

COMPLETION_STEPS = ('basicInfo', 'skills', 'preferences', 'avatar')


class User(db.Model):
    """User profile for the skill exchange."""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default='user', nullable=False)  # 'user', 'admin'

    # Profile info
    avatar = db.Column(db.String(500), nullable=True)
    bio = db.Column(db.String(500), nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    city = db.Column(db.String(100), nullable=True)
    country = db.Column(db.String(100), nullable=True)

    # Contact
    phone = db.Column(db.String(30), nullable=True)
    website = db.Column(db.String(500), nullable=True)
    linkedin = db.Column(db.String(500), nullable=True)
    github = db.Column(db.String(500), nullable=True)
    twitter = db.Column(db.String(500), nullable=True)

    # Preferences
    available_hours = db.Column(db.JSON, default=list, nullable=False)  # [{'day', 'startTime', 'endTime'}]
    meeting_types = db.Column(db.JSON, default=list, nullable=False)
    languages = db.Column(db.JSON, default=list, nullable=False)
    max_distance = db.Column(db.Integer, default=50, nullable=False)  # km
    session_duration = db.Column(db.Integer, default=60, nullable=False)  # minutes

    # Stats
    skills_shared = db.Column(db.Integer, default=0, nullable=False)
    skills_learned = db.Column(db.Integer, default=0, nullable=False)
    rating = db.Column(db.Float, default=0, nullable=False)
    total_sessions = db.Column(db.Integer, default=0, nullable=False)
    total_reviews = db.Column(db.Integer, default=0, nullable=False)

    # Profile completion, kept in sync by services.completion
    profile_completed = db.Column(db.Boolean, default=False, nullable=False)
    step_basic_info = db.Column(db.Boolean, default=False, nullable=False)
    step_skills = db.Column(db.Boolean, default=False, nullable=False)
    step_preferences = db.Column(db.Boolean, default=False, nullable=False)
    step_avatar = db.Column(db.Boolean, default=False, nullable=False)

    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Declared skills, in the order they were added
    skills = db.relationship(
        'UserSkill',
        back_populates='user',
        order_by='UserSkill.id',
        cascade='all, delete-orphan'
    )

    @validates('email')
    def _normalize_email(self, key, value):
        return value.strip().lower() if value else value

    def set_password(self, password):
        """Hash and set the user password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if the provided password matches the hash."""
        return check_password_hash(self.password_hash, password)

    @property
    def completion_steps(self):
        return {
            'basicInfo': bool(self.step_basic_info),
            'skills': bool(self.step_skills),
            'preferences': bool(self.step_preferences),
            'avatar': bool(self.step_avatar),
        }

    @property
    def profile_completion_percentage(self):
        steps = self.completion_steps
        completed = sum(1 for done in steps.values() if done)
        return round(100 * completed / len(COMPLETION_STEPS))

    @property
    def location(self):
        return {'city': self.city, 'country': self.country}

    @property
    def stats(self):
        return {
            'skillsShared': self.skills_shared or 0,
            'skillsLearned': self.skills_learned or 0,
            'rating': self.rating or 0,
            'totalSessions': self.total_sessions or 0,
            'totalReviews': self.total_reviews or 0,
        }

    @property
    def preferences(self):
        return {
            'availableHours': list(self.available_hours or []),
            'meetingTypes': list(self.meeting_types or []),
            'languages': list(self.languages or []),
            'maxDistance': self.max_distance,
            'sessionDuration': self.session_duration,
        }

    def to_summary_dict(self):
        """Short public form embedded in search results."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'avatar': self.avatar,
            'location': self.location,
            'bio': self.bio,
        }

    def to_dict(self):
        """Convert user to dictionary (owner's view)."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'avatar': self.avatar,
            'bio': self.bio,
            'dateOfBirth': self.date_of_birth.isoformat() if self.date_of_birth else None,
            'location': self.location,
            'contact': {
                'phone': self.phone,
                'website': self.website,
                'linkedin': self.linkedin,
                'github': self.github,
                'twitter': self.twitter,
            },
            'skills': [skill.to_dict() for skill in self.skills],
            'preferences': self.preferences,
            'stats': self.stats,
            'profileCompleted': self.profile_completed,
            'profileCompletionSteps': self.completion_steps,
            'profileCompletionPercentage': self.profile_completion_percentage,
            'isActive': self.is_active,
            'lastLogin': self.last_login.isoformat() if self.last_login else None,
            'createdAt': self.created_at.isoformat(),
            'updatedAt': self.updated_at.isoformat()
        }

    def __repr__(self):
        return f'<User {self.email}>'
