"""
Application Configuration

Centralizes all Flask and application configuration settings.
"""

import os
from datetime import timedelta

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')
    PERMANENT_SESSION_LIFETIME = timedelta(days=30)

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///mise.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Household login (generate with: python -m utils.auth <password>)
    HOUSEHOLD_PASSWORD_HASH = os.environ.get('HOUSEHOLD_PASSWORD_HASH')

    # Recipe import
    ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY')
    RECIPE_PARSER_MODEL = os.environ.get('RECIPE_PARSER_MODEL', 'claude-sonnet-4-5')
    RECIPE_PARSER_MAX_TOKENS = 4096
    IMPORT_TEXT_LIMIT = 8000  # characters of page text sent to the parser

    # Upload settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max request body (base64 photos)

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    HOUSEHOLD_PASSWORD_HASH = None
    ANTHROPIC_API_KEY = None


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
