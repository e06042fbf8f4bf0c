import os
from datetime import timedelta

from dotenv import load_dotenv


# Determine the folder of the top-level directory of this project
BASEDIR = os.path.abspath(os.path.dirname(__file__))

# Load the environment variables from the .env file (if it exists)
load_dotenv(os.path.join(BASEDIR, '.env'))


class Config(object):
    FLASK_ENV = 'development'
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv('SECRET_KEY', default='BAD_SECRET_KEY')
    # Must be exactly 32 bytes, as it is used as the encryption key for
    # passwords and API secrets
    AUTH_SECRET = os.getenv('AUTH_SECRET')
    # Since SQLAlchemy 1.4.x has removed support for the 'postgres://' URI scheme,
    # update the URI to the postgres database to use the supported 'postgresql://' scheme
    if os.getenv('DATABASE_URL'):
        SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL').replace("postgres://", "postgresql://", 1)
    else:
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{os.path.join(BASEDIR, 'instance', 'app.db')}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Logging
    LOG_TO_STDOUT = os.getenv('LOG_TO_STDOUT', default='False').lower() in ('true', '1', 'yes')
    # Posts and login throttling
    POSTS_PER_PAGE = 20
    MAX_LOGIN_ATTEMPTS = 5
    LOGIN_ATTEMPTS_WINDOW = timedelta(minutes=5)
    # APIFairy
    APIFAIRY_TITLE = 'Flask CMS API'
    APIFAIRY_VERSION = '0.1'
    APIFAIRY_UI = 'elements'


class ProductionConfig(Config):
    FLASK_ENV = 'production'


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    AUTH_SECRET = 'TestingAuthSecret-0123456789abcd'
    WTF_CSRF_ENABLED = False
    LOG_TO_STDOUT = True
