"""Routes package for the SkillExchange API."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .auth import auth_bp
    from . import password  # noqa: F401  (adds the reset routes to auth_bp)
    from .skills import skills_bp
    from .profile import profile_bp
    from .users import users_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(skills_bp, url_prefix='/api/skills')
    app.register_blueprint(profile_bp, url_prefix='/api/profile')
    app.register_blueprint(users_bp, url_prefix='/api/users')
