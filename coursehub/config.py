"""
Configuration settings for the application
"""
import os
from dotenv import load_dotenv
from .env_config import SITE_URL, ENVIRONMENT, DEBUG

# Load environment variables
load_dotenv()

# Module-level configuration variables
SUPABASE_URL = os.getenv('SUPABASE_URL') or os.getenv('VITE_SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_KEY') or os.getenv('VITE_SUPABASE_ANON_KEY')
SECRET_KEY = os.getenv('SECRET_KEY')

# Server settings
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '5000'))

# Logging settings
LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO')
LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


class Config:
    """
    Configuration class for the application.
    Contains all necessary settings and environment variables.
    """

    # Supabase project
    SUPABASE_URL = SUPABASE_URL
    SUPABASE_KEY = SUPABASE_KEY

    # Flask session cookie holds the Supabase tokens
    SECRET_KEY = SECRET_KEY or ('dev-secret-key' if DEBUG else None)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Environment settings
    ENVIRONMENT = ENVIRONMENT
    DEBUG = DEBUG
    TESTING = False
    SITE_URL = SITE_URL

    # Server settings
    HOST = HOST
    PORT = PORT

    # Factory returning a Supabase client, None means create_client()
    SUPABASE_CLIENT_FACTORY = None

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration values are set.
        Raises ValueError if any required value is missing.
        """
        if not cls.SUPABASE_URL:
            raise ValueError("SUPABASE_URL environment variable is not set")
        if not cls.SUPABASE_KEY:
            raise ValueError("SUPABASE_KEY environment variable is not set")
        if not cls.SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable is not set")


class ProductionConfig(Config):
    DEBUG = False
    # No development fallback: validate() fails without SECRET_KEY
    SECRET_KEY = SECRET_KEY
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    SECRET_KEY = 'testing-secret-key'
    SUPABASE_URL = 'http://localhost:54321'
    SUPABASE_KEY = 'testing-anon-key'


config_by_name = {
    'development': Config,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
