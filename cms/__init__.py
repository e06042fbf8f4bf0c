"""
Welcome to the documentation for the Flask CMS!

## Introduction

The Flask CMS is a small **content-management system** for writing blog posts,
with a server-rendered dashboard for authors and administrators and a JSON API
for reading and writing posts from other applications.

## Key Functionality

The Flask CMS has the following functionality:

1. Work with blog posts:
  * Create a new blog post (markdown)
  * Edit a blog post
  * Delete a blog post
  * List blog posts (paginated)
2. User management:
  * One-time setup of the first administrator account
  * Administrators create, update, list, and delete user accounts
  * Users update or delete their own account
  * Session login with login-attempt throttling
  * API key and secret for each user to access the JSON API

## Key Modules

The project utilizes the following modules:

* **Flask**: micro-framework for web application development
* **APIFairy**: API framework for Flask which includes the following dependencies:
  * **Flask-Marshmallow** - Flask extension for using Marshmallow (object serialization/deserialization library)
  * **Flask-HTTPAuth** - Flask extension for HTTP authentication
  * **apispec** - API specification generator that supports the OpenAPI specification
* **Flask-Login**: session management for the dashboard pages
* **Flask-WTF**: forms (and CSRF protection) for the dashboard pages
* **Flask-SQLAlchemy** and **Flask-Migrate**: database models and migrations
* **cryptography**: symmetric encryption of passwords and API secrets
* **Markdown** and **bleach**: rendering blog posts to sanitized HTML
* **pytest**: framework for testing Python projects
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from apifairy import APIFairy
from click import echo
from flask import Flask
from flask.logging import default_handler
from flask_httpauth import HTTPBasicAuth
from flask_login import LoginManager
from flask_marshmallow import Marshmallow
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect
from sqlalchemy import MetaData


# -------------
# Configuration
# -------------

# Create a naming convention for the database tables
convention = {
    "ix": 'ix_%(column_0_label)s',
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
metadata = MetaData(naming_convention=convention)

# Create the instances of the Flask extensions in the global scope,
# but without any arguments passed in. These instances are not
# attached to the Flask application at this point.
apifairy = APIFairy()
ma = Marshmallow()
database = SQLAlchemy(metadata=metadata)
db_migration = Migrate()
basic_auth = HTTPBasicAuth()
csrf = CSRFProtect()
login = LoginManager()
login.login_view = "pages.login"


# ----------------------------
# Application Factory Function
# ----------------------------

def create_app():
    # Create the Flask application
    app = Flask(__name__)

    # Configure the Flask application
    config_type = os.getenv('CONFIG_TYPE', default='config.DevelopmentConfig')
    app.config.from_object(config_type)

    check_required_config(app)
    initialize_extensions(app)
    register_blueprints(app)
    configure_logging(app)
    register_error_handlers(app)
    register_template_filters(app)
    register_cli_commands(app)
    return app


# ----------------
# Helper Functions
# ----------------

def check_required_config(app):
    auth_secret = app.config.get('AUTH_SECRET')
    if not auth_secret:
        raise RuntimeError("A required configuration variable, 'AUTH_SECRET', was not found.")
    if len(auth_secret.encode('utf-8')) != 32:
        raise RuntimeError("'AUTH_SECRET' must be exactly 32 bytes long.")


def initialize_extensions(app):
    # Since the application instance is now created, pass it to each Flask
    # extension instance to bind it to the Flask application instance (app)
    apifairy.init_app(app)
    ma.init_app(app)
    database.init_app(app)
    db_migration.init_app(app, database, render_as_batch=True)
    csrf.init_app(app)
    login.init_app(app)

    # Flask-Login configuration
    from cms.models import User

    @login.user_loader
    def load_user(user_id):
        return User.query.filter_by(id=int(user_id)).first()


def register_blueprints(app):
    # Import the blueprints
    from cms.api import api_blueprint
    from cms.pages import pages_blueprint
    from cms.setup import setup_blueprint

    # The JSON API authenticates with API keys rather than session cookies,
    # so CSRF protection does not apply to it
    csrf.exempt(api_blueprint)

    # Since the application instance is now created, register each Blueprint
    # with the Flask application instance (app)
    app.register_blueprint(setup_blueprint, url_prefix='/setup')
    app.register_blueprint(api_blueprint, url_prefix='/api')
    app.register_blueprint(pages_blueprint)


def configure_logging(app):
    if app.config['LOG_TO_STDOUT']:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.INFO)
        app.logger.addHandler(stream_handler)
    else:
        os.makedirs(app.instance_path, exist_ok=True)
        file_handler = RotatingFileHandler(os.path.join(app.instance_path, 'flask-cms.log'),
                                           maxBytes=16384,
                                           backupCount=20)
        file_formatter = logging.Formatter('%(asctime)s %(levelname)s %(threadName)s-%(thread)d: %(message)s [in %(filename)s:%(lineno)d]')
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

    # Remove the default logger configured by Flask
    app.logger.removeHandler(default_handler)
    app.logger.setLevel(logging.INFO)
    app.logger.info('Starting the Flask CMS...')


def register_error_handlers(app):
    from cms.errors import handle_http_exception, handle_validation_error
    from werkzeug.exceptions import HTTPException

    app.register_error_handler(HTTPException, handle_http_exception)
    apifairy.error_handler(handle_validation_error)


def register_template_filters(app):
    from cms.formatting import format_timestamp

    app.jinja_env.filters['timestamp'] = format_timestamp


def register_cli_commands(app):
    @app.cli.command('init_db')
    def initialize_database():
        """Initialize the database."""
        database.drop_all()
        database.create_all()
        echo('Initialized the database!')
