"""Application configuration, read from the environment (.env is loaded by the package)."""

import os


def _database_url(default):
    url = os.getenv('DATABASE_URL', default)
    # Render/Heroku style URLs
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _env_flag(name, default):
    return os.getenv(name, str(default)).lower() in ('true', '1', 'yes')


class Config:
    ENV_NAME = 'development'
    SQLALCHEMY_DATABASE_URI = _database_url('sqlite:///skillexchange.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    JWT_ACCESS_TOKEN_EXPIRES = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 2592000))
    REDIS_URL = os.getenv('REDIS_URL')
    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', True)
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    STATS_RECOMPUTE_TIMEOUT = int(os.getenv('STATS_RECOMPUTE_TIMEOUT', 300))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    SEARCH_DEFAULT_LIMIT = 12
    SUGGESTIONS_LIMIT = 10
    POPULAR_SEARCHES_LIMIT = 10
    PASSWORD_RESET_EXPIRES_MINUTES = int(os.getenv('PASSWORD_RESET_EXPIRES_MINUTES', 10))
    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000')


class DevelopmentConfig(Config):
    pass


class TestingConfig(Config):
    ENV_NAME = 'testing'
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'test-secret-key-for-testing'
    RATELIMIT_ENABLED = False
    REDIS_URL = None


class ProductionConfig(Config):
    ENV_NAME = 'production'
    SQLALCHEMY_DATABASE_URI = _database_url('sqlite:///skillexchange.db')


CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}
