from datetime import datetime

from flask import current_app

from cms import database
from cms.crypto import decrypt_text, encrypt_text, generate_token, strings_match


class Post(database.Model):
    """
    Class that represents a blog post.

    The following attributes of a blog post are stored in this table:
        * author_id - ID of the user that wrote (and owns) this blog post
        * title - title of the blog post
        * body - body of the blog post (markdown)
        * posted_on - date and time (in UTC) when the blog post was created
        * updated_on - date and time (in UTC) when the blog post was last edited
        * last_updated_by - username of the user that last edited the blog post
    """
    __tablename__ = 'posts'

    id = database.Column(database.Integer, primary_key=True)
    author_id = database.Column(database.Integer, database.ForeignKey('users.id'), nullable=False)
    title = database.Column(database.String(100), nullable=False)
    body = database.Column(database.Text, nullable=False)
    posted_on = database.Column(database.DateTime)
    updated_on = database.Column(database.DateTime)
    last_updated_by = database.Column(database.String(30), default='')

    def __init__(self, title: str, body: str, author_id: int):
        """Create a new blog post."""
        self.title = title
        self.body = body
        self.author_id = author_id
        self.posted_on = datetime.utcnow()
        self.updated_on = None
        self.last_updated_by = ''

    def update(self, title: str, body: str, editor):
        """Update the blog post, recording who edited it."""
        self.title = title
        self.body = body
        self.updated_on = datetime.utcnow()
        self.last_updated_by = editor.username

    @property
    def author_name(self):
        return self.author.username

    @staticmethod
    def find_for_user(post_id, user, allow_admin=True):
        """Return the blog post if `user` may access it, otherwise None.

        Users can only access their own blog posts. Administrators can
        access any blog post when `allow_admin` is set.
        """
        if allow_admin and user.is_admin:
            return Post.query.filter_by(id=post_id).first()
        return Post.query.filter_by(id=post_id, author_id=user.id).first()

    @staticmethod
    def page_for_author(username, page, per_page):
        """Return a page of the blog posts (newest first) written by a user.

        The second value returned indicates if this is the last page.
        """
        author = User.query.filter_by(username=username).first()
        if author is None:
            return [], True

        # Fetch one extra blog post to find out if there is another page
        posts = (Post.query.filter_by(author_id=author.id)
                 .order_by(Post.posted_on.desc(), Post.id.desc())
                 .offset(per_page * (page - 1))
                 .limit(per_page + 1)
                 .all())
        return posts[:per_page], len(posts) <= per_page

    def __repr__(self):
        return f"<Post: {self.title}>"


class User(database.Model):
    """
    Class that represents a user of the application.

    The following attributes of a user are stored in this table:
        * username - unique username of the user
        * encrypted password - password encrypted with the AUTH_SECRET
        * API key - public key used to access the JSON API
        * encrypted API secret - secret (encrypted with the AUTH_SECRET) used
                                 to access the JSON API
        * is_admin - flag indicating if the user is an administrator
        * created_on - date and time (in UTC) when the user was created
        * login_attempts - number of login attempts in the current window
        * login_attempts_expiry - date and time (in UTC) when the current
                                  login attempt window expires

    REMEMBER: Never store the plaintext password in a database!
    """
    __tablename__ = 'users'

    id = database.Column(database.Integer, primary_key=True)
    username = database.Column(database.String(30), unique=True, nullable=False)
    password_encrypted = database.Column(database.String(256), nullable=False)
    api_key = database.Column(database.String(64), unique=True, nullable=False, index=True)
    api_secret_encrypted = database.Column(database.String(256), unique=True, nullable=False)
    is_admin = database.Column(database.Boolean, default=False)
    created_on = database.Column(database.DateTime)
    login_attempts = database.Column(database.Integer, default=0)
    login_attempts_expiry = database.Column(database.DateTime)
    posts = database.relationship('Post', backref='author', lazy='dynamic')

    def __init__(self, username: str, password_plaintext: str, is_admin: bool = False):
        """Create a new User object, including a new set of API keys."""
        self.username = username
        self.set_password(password_plaintext)
        self.generate_api_keys()
        self.is_admin = is_admin
        self.created_on = datetime.utcnow()
        self.login_attempts = 0
        self.login_attempts_expiry = datetime.utcnow()

    def set_password(self, password_plaintext: str):
        self.password_encrypted = encrypt_text(password_plaintext, current_app.config['AUTH_SECRET'])

    def generate_api_keys(self):
        self.api_key = generate_token()
        self.api_secret_encrypted = encrypt_text(generate_token(), current_app.config['AUTH_SECRET'])

    @property
    def api_secret(self):
        return decrypt_text(self.api_secret_encrypted, current_app.config['AUTH_SECRET'])

    def too_many_logins(self):
        """Check if the user has used up their login attempts.

        Once the login attempt window has expired, the counter is reset.
        """
        if datetime.utcnow() >= self.login_attempts_expiry:
            self.login_attempts = 0
            return False
        return self.login_attempts >= current_app.config['MAX_LOGIN_ATTEMPTS']

    def is_password_correct(self, password_plaintext: str):
        """Check the password, counting the check as a login attempt."""
        self.login_attempts += 1
        self.login_attempts_expiry = datetime.utcnow() + current_app.config['LOGIN_ATTEMPTS_WINDOW']

        password = decrypt_text(self.password_encrypted, current_app.config['AUTH_SECRET'])
        if strings_match(password, password_plaintext):
            self.login_attempts = 0
            return True
        return False

    def is_api_secret_correct(self, api_secret: str):
        return strings_match(self.api_secret, api_secret)

    def resolve_author_username(self, username=None):
        """Return whose blog posts this user can list.

        Only administrators can list the blog posts of another user.
        """
        if self.is_admin and username:
            return username
        return self.username

    @staticmethod
    def admin_account_exists():
        return User.query.filter_by(is_admin=True).first() is not None

    @staticmethod
    def count_admins():
        return User.query.filter_by(is_admin=True).count()

    def __repr__(self):
        return f'<User: {self.username}>'

    @property
    def is_authenticated(self):
        """Return True if the user has been successfully registered."""
        return True

    @property
    def is_active(self):
        """Always True, as all users are active."""
        return True

    @property
    def is_anonymous(self):
        """Always False, as anonymous users aren't supported."""
        return False

    def get_id(self):
        """Return the user ID as a unicode string (`str`)."""
        return str(self.id)
