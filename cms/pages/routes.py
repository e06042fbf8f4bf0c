import functools

import click
from flask import (abort, current_app, flash, redirect, render_template,
                   request, url_for)
from flask_login import current_user, login_required, login_user, logout_user

from cms import database
from cms.errors import RequestError
from cms.models import Post, User
from cms.schemas import NewUserSchema

from . import pages_blueprint
from .forms import (CreateUserForm, DeleteUserForm, LoginForm, PostForm,
                    UpdateUserForm)


# ----------
# Decorators
# ----------

def admin_required(func):
    @functools.wraps(func)
    def wrapper_admin_required(*args, **kwargs):
        if not current_user.is_admin:
            raise RequestError(403, 'You must be logged in as an administrator.',
                               template='pages/dashboard.html')
        return func(*args, **kwargs)
    return wrapper_admin_required


@pages_blueprint.before_request
def redirect_if_setup_required():
    if not User.admin_account_exists():
        return redirect(url_for('setup.setup'))


# ------------
# CLI Commands
# ------------

@pages_blueprint.cli.command('create_admin_user')
@click.argument('username')
@click.argument('password')
def create(username, password):
    """Create a new admin user and add it to the database."""
    errors = NewUserSchema().validate({'username': username, 'password': password})
    if errors:
        messages = [message for field in ('username', 'password') for message in errors.get(field, [])]
        raise click.ClickException(' '.join(messages))

    if User.query.filter_by(username=username).first():
        raise click.ClickException(f'Username ({username}) is taken!')

    admin_user = User(username, password, is_admin=True)
    database.session.add(admin_user)
    database.session.commit()
    click.echo(f'Created new admin user ({username})!')


@pages_blueprint.cli.command('regenerate_api_keys')
@click.argument('username')
def regenerate_api_keys(username):
    """Generate a new API key and API secret for a user."""
    user = User.query.filter_by(username=username).first()
    if user is None:
        raise click.ClickException(f'User ({username}) not found!')

    user.generate_api_keys()
    database.session.add(user)
    database.session.commit()
    click.echo(f'Generated new API keys for {username}!')


# ----------------
# Helper Functions
# ----------------

def get_page_number():
    page = request.args.get('page', 1, type=int)
    return page if page > 1 else 1


def delete_user_and_posts(user):
    # First, delete all the blog posts written by the user
    for post in Post.query.filter_by(author_id=user.id).all():
        database.session.delete(post)

    # Second, delete the user
    database.session.delete(user)
    database.session.commit()


# -----------------------
# Routes - Authentication
# -----------------------

@pages_blueprint.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('pages.dashboard'))

    form = LoginForm()

    if request.method == 'POST':
        if not form.validate_on_submit():
            raise RequestError(401, 'Username or password is invalid.',
                               template='pages/login.html', form=form)

        user = User.query.filter_by(username=form.username.data).first()
        if user is None:
            current_app.logger.info(f'Login attempted for unknown user: {form.username.data}')
            raise RequestError(401, 'Username or password is incorrect.',
                               template='pages/login.html', form=form)

        if user.too_many_logins():
            database.session.commit()
            current_app.logger.warning(f'Too many login attempts for user: {user.username}')
            raise RequestError(401, 'Too many logins. Try again later.',
                               template='pages/login.html', form=form)

        password_correct = user.is_password_correct(form.password.data)
        database.session.add(user)
        database.session.commit()
        if not password_correct:
            current_app.logger.info(f'Incorrect password for user: {user.username}')
            raise RequestError(401, 'Username or password is incorrect.',
                               template='pages/login.html', form=form)

        login_user(user)
        current_app.logger.info(f'Logged in user: {user.username}')
        return redirect(url_for('pages.dashboard'))

    return render_template('pages/login.html', form=form)


@pages_blueprint.route('/logout')
def logout():
    if current_user.is_authenticated:
        current_app.logger.info(f'Logged out user: {current_user.username}')
        logout_user()
    return redirect(url_for('pages.dashboard'))


@pages_blueprint.route('/')
@login_required
def dashboard():
    return render_template('pages/dashboard.html')


@pages_blueprint.route('/api-key')
@login_required
def api_key():
    """Display the API key and API secret of the user."""
    return render_template('pages/api_key.html',
                           key=current_user.api_key,
                           secret=current_user.api_secret)


# ---------------------
# Routes - User Accounts
# ---------------------

@pages_blueprint.route('/create-user', methods=['GET', 'POST'])
@login_required
@admin_required
def create_user():
    form = CreateUserForm()

    if request.method == 'POST':
        if not form.validate_on_submit():
            raise RequestError(400, 'There were issues validating your input.',
                               template='pages/create_user.html', form=form)

        if User.query.filter_by(username=form.username.data).first():
            raise RequestError(409, 'That username is taken. Try another one.',
                               template='pages/create_user.html', form=form)

        new_user = User(form.username.data, form.password.data, is_admin=form.admin.data)
        database.session.add(new_user)
        database.session.commit()
        current_app.logger.info(f'User {new_user.username} created by {current_user.username}')
        flash('The new user has been created successfully.', 'success')
        return redirect(url_for('pages.create_user'))

    return render_template('pages/create_user.html', form=form)


@pages_blueprint.route('/list-users')
@login_required
@admin_required
def list_users():
    """Display all users."""
    users = User.query.order_by(User.id).all()
    for user in users:
        user.number_of_posts = user.posts.count()
    return render_template('pages/list_users.html', users=users)


@pages_blueprint.route('/update-user', methods=['GET', 'POST'])
@login_required
def update_user():
    """Update the user, or (for administrators) another user."""
    form = UpdateUserForm()

    if request.method == 'GET':
        return render_template('pages/update_user.html', form=form)

    if not form.validate_on_submit():
        raise RequestError(400, 'There were issues validating your input.',
                           template='pages/update_user.html', form=form)

    user = current_user._get_current_object()
    different_user = False
    if current_user.is_admin and form.old_username.data:
        user = User.query.filter_by(username=form.old_username.data).first()
        if user is None:
            raise RequestError(404, 'User not found.',
                               template='pages/update_user.html', form=form)
        different_user = user.id != current_user.id

    change_admin_status = current_user.is_admin and bool(form.admin.data)
    make_admin = form.admin.data == 'grant'
    if change_admin_status and not different_user and not make_admin and User.count_admins() == 1:
        raise RequestError(409, 'There must be at least one administrator account.',
                           template='pages/update_user.html', form=form)

    if form.new_username.data and User.query.filter_by(username=form.new_username.data).first():
        raise RequestError(409, 'This username is taken.',
                           template='pages/update_user.html', form=form)

    if change_admin_status:
        user.is_admin = make_admin

    if form.new_username.data:
        user.username = form.new_username.data

    if form.new_password.data:
        user.set_password(form.new_password.data)

    if form.new_keys.data:
        user.generate_api_keys()

    database.session.add(user)
    database.session.commit()
    current_app.logger.info(f'User {user.username} updated by {current_user.username}')
    flash('The user has been updated.', 'success')
    return redirect(url_for('pages.dashboard'))


@pages_blueprint.route('/delete-user', methods=['GET', 'POST'])
@login_required
def delete_user():
    """Delete the user, or (for administrators) another non-admin user."""
    form = DeleteUserForm()

    if request.method == 'GET':
        return render_template('pages/delete_user.html', form=form)

    if not form.validate_on_submit():
        abort(400)

    if current_user.is_admin:
        username = form.username.data
        if not username or username == current_user.username:
            # Administrators must remove their own administrator status
            # (from the 'Update User' page) before deleting their account
            raise RequestError(409, 'Admin accounts cannot be deleted.',
                               template='pages/delete_user.html', form=form)

        user = User.query.filter_by(username=username, is_admin=False).first()
        if user is None:
            raise RequestError(404, 'Non-admin user not found.',
                               template='pages/delete_user.html', form=form)

        delete_user_and_posts(user)
        current_app.logger.info(f'User {username} deleted by {current_user.username}')
        flash(f'The user ({username}) and their blog posts have been deleted.', 'success')
        return redirect(url_for('pages.delete_user'))

    user = current_user._get_current_object()
    username = user.username
    logout_user()
    delete_user_and_posts(user)
    current_app.logger.info(f'User {username} deleted their account')
    return redirect(url_for('pages.dashboard'))


# ------------------
# Routes - Blog Posts
# ------------------

@pages_blueprint.route('/create-post', methods=['GET', 'POST'])
@login_required
def create_post():
    form = PostForm()

    if request.method == 'POST':
        if not form.validate_on_submit():
            raise RequestError(400, 'There were issues validating your submission.',
                               template='pages/post_editor.html', form=form, editing=False)

        new_post = Post(form.title.data, form.body.data, current_user.id)
        database.session.add(new_post)
        database.session.commit()
        current_app.logger.info(f'Blog post {new_post.id} created by {current_user.username}')
        flash('Your blog post has been created.', 'success')
        return redirect(url_for('pages.dashboard'))

    return render_template('pages/post_editor.html', form=form, editing=False)


@pages_blueprint.route('/list-posts')
@login_required
def list_posts():
    page = get_page_number()
    username = current_user.resolve_author_username(request.args.get('username', type=str))
    posts, last_page = Post.page_for_author(username, page, current_app.config['POSTS_PER_PAGE'])
    return render_template('pages/list_posts.html',
                           posts=posts,
                           page=page,
                           username=username,
                           first_page=page == 1,
                           last_page=last_page)


@pages_blueprint.route('/post/<int:post_id>')
@login_required
def fetch_post(post_id):
    post = Post.find_for_user(post_id, current_user)
    if post is None:
        raise RequestError(404, 'Post not found.', template='pages/dashboard.html')

    form = PostForm(obj=post)
    return render_template('pages/post_editor.html', form=form, post=post, editing=True)


@pages_blueprint.route('/edit-post/<int:post_id>', methods=['POST'])
@login_required
def edit_post(post_id):
    form = PostForm()
    post = Post.find_for_user(post_id, current_user)

    if not form.validate_on_submit():
        raise RequestError(400, 'There were issues validating your edits.',
                           template='pages/post_editor.html', form=form, post=post, editing=True)

    if post is None:
        raise RequestError(404, 'Post not found.',
                           template='pages/post_editor.html', form=form, editing=True)

    post.update(form.title.data, form.body.data, current_user)
    database.session.add(post)
    database.session.commit()
    current_app.logger.info(f'Blog post {post.id} edited by {current_user.username}')
    flash('Your edits have been saved.', 'success')
    return redirect(url_for('pages.dashboard'))


@pages_blueprint.route('/delete-post/<int:post_id>', methods=['POST'])
@login_required
def delete_post(post_id):
    post = Post.find_for_user(post_id, current_user)
    if post is None:
        raise RequestError(404, 'Post not found.', template='pages/dashboard.html')

    author_name = post.author_name
    database.session.delete(post)
    database.session.commit()
    current_app.logger.info(f'Blog post {post_id} deleted by {current_user.username}')
    flash('The blog post has been deleted.', 'success')
    return redirect(url_for('pages.list_posts', username=author_name))
