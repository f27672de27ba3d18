"""Authentication routes: registration, login, logout and the current user."""

from datetime import datetime

from flask import Blueprint, request

from skillexchange import db, limiter
from skillexchange.errors import AuthError, ConflictError, NotFoundError, ValidationError
from skillexchange.models import User
from skillexchange.services.completion import apply_completion
from skillexchange.utils import token_required, generate_token, success_response
from skillexchange.utils.validators import validate_email

auth_bp = Blueprint('auth', __name__)


def json_body():
    """The JSON request body, which must be an object."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError.for_field('body', 'Request body must be a JSON object')
    return data


def _account_dict(user):
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'lastLogin': user.last_login.isoformat() if user.last_login else None
    }


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Register a new user account."""
    data = json_body()

    if not all(data.get(k) for k in ['name', 'email', 'password']):
        raise ValidationError.for_field('body', 'Missing required fields: name, email and password')
    if not isinstance(data['name'], str) or not isinstance(data['email'], str):
        raise ValidationError.for_field('body', 'Name and email must be strings')

    name = data['name'].strip()
    email = data['email'].strip().lower()
    password = data['password']

    errors = []
    if len(name) < 2 or len(name) > 50:
        errors.append({'field': 'name', 'message': 'Name must be between 2 and 50 characters'})
    if not validate_email(email):
        errors.append({'field': 'email', 'message': 'Please provide a valid email'})
    if not isinstance(password, str) or len(password) < 6 or len(password) > 128:
        errors.append({'field': 'password', 'message': 'Password must be between 6 and 128 characters'})
    if errors:
        raise ValidationError('Validation errors', errors=errors)

    if User.query.filter_by(email=email).first():
        raise ConflictError('User already exists with this email', status_code=409)

    user = User(name=name, email=email)
    user.set_password(password)
    apply_completion(user)

    db.session.add(user)
    db.session.commit()

    return success_response({
        'user': _account_dict(user),
        'token': generate_token(user)
    }, message='User registered successfully', status=201)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Authenticate user and return JWT token."""
    data = json_body()

    if not all(data.get(k) for k in ['email', 'password']):
        raise ValidationError.for_field('body', 'Missing email or password')
    if not isinstance(data['email'], str) or not isinstance(data['password'], str):
        raise ValidationError.for_field('body', 'Email and password must be strings')

    user = User.query.filter_by(email=data['email'].strip().lower()).first()

    if not user or not user.check_password(data['password']):
        raise AuthError('Invalid credentials')

    if not user.is_active:
        raise AuthError('Account is deactivated')

    user.last_login = datetime.utcnow()
    db.session.commit()

    return success_response({
        'user': _account_dict(user),
        'token': generate_token(user)
    }, message='Login successful')


@auth_bp.route('/logout', methods=['POST'])
@token_required
def logout(current_user_id):
    """Stateless tokens: the client discards its token."""
    return success_response(message='Logout successful')


@auth_bp.route('/me', methods=['GET'])
@token_required
def get_me(current_user_id):
    """Get the authenticated account."""
    user = db.session.get(User, current_user_id)
    if not user:
        raise NotFoundError('User not found')

    account = _account_dict(user)
    account['skills'] = [skill.to_dict() for skill in user.skills]
    account['createdAt'] = user.created_at.isoformat()

    return success_response({'user': account})
