import re

from marshmallow import validate

from cms import ma
from cms.formatting import clean_html, render_markdown, strip_html


# ----------------
# Validation Rules
# ----------------

USERNAME_MIN_LENGTH = 5
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = r'\A[A-Za-z0-9]+\Z'
USERNAME_PATTERN_MESSAGE = 'Your username cannot contain symbols or spaces.'

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 24
# Matched from the start of the password, so each pattern looks anywhere in it
PASSWORD_PATTERNS = [
    (r'.*[a-z]', 'Your password must contain at least one lowercase letter.'),
    (r'.*[A-Z]', 'Your password must contain at least one capital letter.'),
    (r'.*[0-9]', 'Your password must contain at least one number.'),
    (r'.*[$-/:-?{-~!"^_`\[\]]', 'Your password must contain at least one symbol.'),
]
PASSWORD_PATTERN_FLAGS = re.DOTALL

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 100
BODY_MIN_LENGTH = 20
BODY_MAX_LENGTH = 10000


# -------
# Schemas
# -------

class NewUserSchema(ma.Schema):
    """Schema defining the attributes when creating a user outside of a web form."""
    username = ma.String(required=True, validate=[
        validate.Length(min=USERNAME_MIN_LENGTH, max=USERNAME_MAX_LENGTH,
                        error=f'Your username must contain between {USERNAME_MIN_LENGTH} '
                              f'and {USERNAME_MAX_LENGTH} characters.'),
        validate.Regexp(USERNAME_PATTERN, error=USERNAME_PATTERN_MESSAGE),
    ])
    password = ma.String(required=True, validate=[
        validate.Length(min=PASSWORD_MIN_LENGTH, max=PASSWORD_MAX_LENGTH,
                        error=f'Your password must contain between {PASSWORD_MIN_LENGTH} '
                              f'and {PASSWORD_MAX_LENGTH} characters.'),
    ] + [validate.Regexp(pattern, flags=PASSWORD_PATTERN_FLAGS, error=message)
         for pattern, message in PASSWORD_PATTERNS])


class NewPostSchema(ma.Schema):
    """Schema defining the attributes when creating (or editing) a blog post."""
    title = ma.String(required=True, validate=validate.Length(
        min=TITLE_MIN_LENGTH, max=TITLE_MAX_LENGTH,
        error=f'Your post title must contain between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters.'))
    body = ma.String(required=True, validate=validate.Length(
        min=BODY_MIN_LENGTH, max=BODY_MAX_LENGTH,
        error=f'Your post must contain between {BODY_MIN_LENGTH} and {BODY_MAX_LENGTH:,} characters.'))


class PostListArgsSchema(ma.Schema):
    """Schema defining the query arguments when listing blog posts."""
    page = ma.Integer(load_default=1)
    username = ma.String(load_default=None)


class PostSummarySchema(ma.Schema):
    """Schema defining the attributes in a blog post listing."""
    id = ma.Integer()
    title = ma.String()
    author = ma.String(attribute='author_name')
    posted_on = ma.DateTime()
    updated_on = ma.DateTime()
    updated_by = ma.String(attribute='last_updated_by')


class PostSchema(ma.Schema):
    """Schema defining the attributes in a blog post, rendered for display."""
    id = ma.Integer()
    title = ma.Method('get_title')
    author = ma.String(attribute='author_name')
    last_updated_by = ma.String()
    posted_on = ma.DateTime()
    updated_on = ma.DateTime()
    body = ma.Method('get_body')

    def get_title(self, post):
        return strip_html(post.title)

    def get_body(self, post):
        return clean_html(render_markdown(post.body))


class PostListSchema(ma.Schema):
    """Schema defining a page of blog posts."""
    page = ma.Integer()
    posts = ma.List(ma.Nested(PostSummarySchema))


class PostEnvelopeSchema(ma.Schema):
    """Schema defining the response containing a single blog post."""
    post = ma.Nested(PostSchema)
