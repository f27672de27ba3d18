"""Shared utilities for the SkillExchange backend.

This package contains reusable utilities that are shared across
multiple route files to reduce code duplication.
"""

from skillexchange.utils.auth import token_required, generate_token, decode_token
from skillexchange.utils.responses import success_response

__all__ = [
    'token_required',
    'generate_token',
    'decode_token',
    'success_response',
]
