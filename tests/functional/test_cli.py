"""
This file (test_cli.py) contains the functional tests for the CLI commands.
"""
from cms.models import Post, User


# ---------
# init_db
# ---------

def test_init_db(app, user_posts):
    """
    GIVEN a database with users and blog posts
    WHEN the 'init_db' command is run
    THEN check that the tables are emptied
    """
    runner = app.test_cli_runner()
    result = runner.invoke(args=['init_db'])
    assert result.exit_code == 0
    assert 'Initialized the database!' in result.output

    with app.app_context():
        assert User.query.count() == 0
        assert Post.query.count() == 0


# -----------------
# create_admin_user
# -----------------

def test_create_admin_user(app, test_client):
    """
    GIVEN a Flask application without an administrator account
    WHEN the 'pages create_admin_user' command is run with a valid username and password
    THEN check that the administrator can log in
    """
    runner = app.test_cli_runner()
    result = runner.invoke(args=['pages', 'create_admin_user', 'patkennedy', 'FlaskIsAwesome123!'])
    assert result.exit_code == 0
    assert 'Created new admin user (patkennedy)!' in result.output

    with app.app_context():
        admin = User.query.filter_by(username='patkennedy').first()
        assert admin.is_admin

    response = test_client.post('/login',
                                data={'username': 'patkennedy', 'password': 'FlaskIsAwesome123!'},
                                follow_redirects=True)
    assert response.status_code == 200
    assert b'Welcome, patkennedy!' in response.data


def test_create_admin_user_invalid(app, test_client):
    """
    GIVEN a Flask application without an administrator account
    WHEN the 'pages create_admin_user' command is run with a password that breaks the rules
    THEN check that no account is created and the setup page is still available
    """
    runner = app.test_cli_runner()
    result = runner.invoke(args=['pages', 'create_admin_user', 'admin', 'password'])
    assert result.exit_code == 1
    assert 'Your password must contain at least one capital letter.' in result.output
    assert 'Your password must contain at least one number.' in result.output

    with app.app_context():
        assert User.query.count() == 0

    response = test_client.get('/setup/')
    assert response.status_code == 200


def test_create_admin_user_invalid_username(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['pages', 'create_admin_user', 'pat_kennedy', 'FlaskIsAwesome123!'])
    assert result.exit_code == 1
    assert 'Your username cannot contain symbols or spaces.' in result.output

    with app.app_context():
        assert User.query.count() == 0


def test_create_admin_user_username_taken(app, admin_user):
    """
    GIVEN an existing administrator account
    WHEN the 'pages create_admin_user' command is run with the same username
    THEN check that the command fails without adding a user
    """
    runner = app.test_cli_runner()
    result = runner.invoke(args=['pages', 'create_admin_user', 'patkennedy', 'FlaskIsGreat456$'])
    assert result.exit_code == 1
    assert 'Username (patkennedy) is taken!' in result.output

    with app.app_context():
        assert User.query.count() == 1
        assert User.query.first().is_password_correct('FlaskIsAwesome123!')


# -------------------
# regenerate_api_keys
# -------------------

def test_regenerate_api_keys(app, test_client, regular_user, user_api_headers, make_api_headers):
    """
    GIVEN a user with API credentials
    WHEN the 'pages regenerate_api_keys' command is run for the user
    THEN check that the old credentials stop working and the new ones work
    """
    runner = app.test_cli_runner()
    result = runner.invoke(args=['pages', 'regenerate_api_keys', 'johndoe79'])
    assert result.exit_code == 0
    assert 'Generated new API keys for johndoe79!' in result.output

    response = test_client.get('/api/list-posts', headers=user_api_headers)
    assert response.status_code == 401

    with app.app_context():
        user = User.query.filter_by(id=regular_user['id']).first()
        new_headers = make_api_headers(user.api_key, user.api_secret)
    response = test_client.get('/api/list-posts', headers=new_headers)
    assert response.status_code == 200


def test_regenerate_api_keys_unknown_user(app, admin_user):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['pages', 'regenerate_api_keys', 'nobody123'])
    assert result.exit_code == 1
    assert 'User (nobody123) not found!' in result.output
