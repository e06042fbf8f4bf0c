import os
from base64 import b64encode

import pytest

from cms import create_app, database
from cms.models import Post, User


ADMIN_USERNAME = 'patkennedy'
ADMIN_PASSWORD = 'FlaskIsAwesome123!'
USER_USERNAME = 'johndoe79'
USER_PASSWORD = 'FlaskIsGreat456$'


# --------
# Fixtures
# --------

@pytest.fixture(scope='function')
def app():
    # Set the Testing configuration prior to creating the Flask application
    os.environ['CONFIG_TYPE'] = 'config.TestingConfig'
    flask_app = create_app()

    # Create the database and the database tables
    with flask_app.app_context():
        database.create_all()

    yield flask_app

    with flask_app.app_context():
        database.session.remove()
        database.drop_all()


@pytest.fixture(scope='function')
def test_client(app):
    return app.test_client()


def add_user(app, username, password, is_admin=False):
    with app.app_context():
        user = User(username, password, is_admin=is_admin)
        database.session.add(user)
        database.session.commit()
        return {'id': user.id,
                'username': username,
                'password': password,
                'api_key': user.api_key,
                'api_secret': user.api_secret}


@pytest.fixture(scope='function')
def admin_user(app):
    return add_user(app, ADMIN_USERNAME, ADMIN_PASSWORD, is_admin=True)


@pytest.fixture(scope='function')
def regular_user(app, admin_user):
    return add_user(app, USER_USERNAME, USER_PASSWORD)


def log_in(client, user):
    client.post('/login',
                data={'username': user['username'], 'password': user['password']},
                follow_redirects=True)
    return client


@pytest.fixture(scope='function')
def admin_client(app, admin_user):
    return log_in(app.test_client(), admin_user)


@pytest.fixture(scope='function')
def user_client(app, regular_user):
    return log_in(app.test_client(), regular_user)


def basic_auth_headers(api_key, api_secret):
    credentials = b64encode(f'{api_key}:{api_secret}'.encode('utf-8')).decode('ascii')
    return {'Authorization': f'Basic {credentials}'}


@pytest.fixture(scope='function')
def make_api_headers():
    return basic_auth_headers


@pytest.fixture(scope='function')
def user_api_headers(regular_user):
    return basic_auth_headers(regular_user['api_key'], regular_user['api_secret'])


@pytest.fixture(scope='function')
def admin_api_headers(admin_user):
    return basic_auth_headers(admin_user['api_key'], admin_user['api_secret'])


@pytest.fixture(scope='function')
def user_posts(app, regular_user):
    """Add three blog posts written by the regular user; return their IDs."""
    with app.app_context():
        posts = [
            Post('My First Post', 'The sun was shining when I woke up this morning.', regular_user['id']),
            Post('Breakfast', 'I tried a new fruit mixture in my oatmeal for **breakfast**.', regular_user['id']),
            Post('<b>Lunch</b>', 'Today I ate a great sandwich for lunch. <script>alert(1)</script>', regular_user['id']),
        ]
        database.session.add_all(posts)
        database.session.commit()
        return [post.id for post in posts]


@pytest.fixture(scope='function')
def admin_post(app, admin_user):
    with app.app_context():
        post = Post('Admin Announcement', 'The CMS will be down for maintenance tonight.', admin_user['id'])
        database.session.add(post)
        database.session.commit()
        return post.id
