"""Database models for the skill exchange."""

from .user import User
from .skill import Skill, UserSkill
from .password_reset import PasswordResetToken

__all__ = ['User', 'Skill', 'UserSkill', 'PasswordResetToken']
