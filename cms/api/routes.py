from apifairy import arguments, authenticate, body, other_responses, response
from flask import abort, current_app

from cms import basic_auth, database
from cms.models import Post, User
from cms.schemas import (NewPostSchema, PostEnvelopeSchema, PostListArgsSchema,
                         PostListSchema)

from . import api_blueprint


# -------
# Schemas
# -------

new_post_schema = NewPostSchema()
post_list_args_schema = PostListArgsSchema()
post_list_schema = PostListSchema()
post_envelope_schema = PostEnvelopeSchema()


@api_blueprint.before_request
def check_setup_complete():
    if not User.admin_account_exists():
        abort(404, 'No admin account found. The CMS likely has not been set up, yet.')


def get_own_post(post_id):
    post = Post.find_for_user(post_id, basic_auth.current_user(), allow_admin=False)
    if post is None:
        abort(404, 'Post not found.')
    return post


# ------
# Routes
# ------

@api_blueprint.route('/list-posts', methods=['GET'])
@authenticate(basic_auth)
@arguments(post_list_args_schema)
@response(post_list_schema)
@other_responses({401: 'Invalid API credentials'})
def list_posts(args):
    """List blog posts

    Administrators can list the blog posts of another user by passing their
    `username`.
    """
    user = basic_auth.current_user()
    page = max(args['page'], 1)
    username = user.resolve_author_username(args['username'])
    posts, _ = Post.page_for_author(username, page, current_app.config['POSTS_PER_PAGE'])
    return {'page': page, 'posts': posts}


@api_blueprint.route('/post/<int:post_id>', methods=['GET'])
@authenticate(basic_auth)
@response(post_envelope_schema)
@other_responses({401: 'Invalid API credentials', 404: 'Post not found'})
def fetch_post(post_id):
    """Retrieve a blog post (rendered as HTML)"""
    return {'post': get_own_post(post_id)}


@api_blueprint.route('/post', methods=['POST'])
@authenticate(basic_auth)
@body(new_post_schema)
@response(post_envelope_schema, 201)
@other_responses({400: 'Bad Request', 401: 'Invalid API credentials'})
def create_post(kwargs):
    """Create a new blog post"""
    user = basic_auth.current_user()
    new_post = Post(author_id=user.id, **kwargs)
    database.session.add(new_post)
    database.session.commit()
    current_app.logger.info(f'Blog post {new_post.id} created by {user.username} (API)')
    return {'post': new_post}


@api_blueprint.route('/post/<int:post_id>', methods=['PUT'])
@authenticate(basic_auth)
@body(new_post_schema)
@response(post_envelope_schema)
@other_responses({400: 'Bad Request', 401: 'Invalid API credentials', 404: 'Post not found'})
def update_post(data, post_id):
    """Update a blog post"""
    user = basic_auth.current_user()
    post = get_own_post(post_id)
    post.update(data['title'], data['body'], user)
    database.session.add(post)
    database.session.commit()
    current_app.logger.info(f'Blog post {post.id} edited by {user.username} (API)')
    return {'post': post}


@api_blueprint.route('/post/<int:post_id>', methods=['DELETE'])
@authenticate(basic_auth)
@other_responses({401: 'Invalid API credentials', 404: 'Post not found'})
def delete_post(post_id):
    """Delete a blog post"""
    user = basic_auth.current_user()
    post = get_own_post(post_id)
    database.session.delete(post)
    database.session.commit()
    current_app.logger.info(f'Blog post {post_id} deleted by {user.username} (API)')
    return '', 204
