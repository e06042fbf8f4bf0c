from flask_wtf import FlaskForm
from wtforms import (BooleanField, PasswordField, SelectField, StringField,
                     TextAreaField)
from wtforms.validators import DataRequired, Length, Optional, Regexp

from cms.schemas import (BODY_MAX_LENGTH, BODY_MIN_LENGTH, PASSWORD_MAX_LENGTH,
                         PASSWORD_MIN_LENGTH, PASSWORD_PATTERN_FLAGS,
                         PASSWORD_PATTERNS, TITLE_MAX_LENGTH, TITLE_MIN_LENGTH,
                         USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH,
                         USERNAME_PATTERN, USERNAME_PATTERN_MESSAGE)


# ----------
# Validators
# ----------

username_validators = [
    Length(min=USERNAME_MIN_LENGTH, message=f'Your username must contain at least {USERNAME_MIN_LENGTH} characters.'),
    Length(max=USERNAME_MAX_LENGTH, message=f'Your username must contain at most {USERNAME_MAX_LENGTH} characters.'),
    Regexp(USERNAME_PATTERN, message=USERNAME_PATTERN_MESSAGE),
]

password_validators = [
    Length(min=PASSWORD_MIN_LENGTH, message=f'Your password must contain at least {PASSWORD_MIN_LENGTH} characters.'),
    Length(max=PASSWORD_MAX_LENGTH, message=f'Your password must contain at most {PASSWORD_MAX_LENGTH} characters.'),
] + [Regexp(pattern, flags=PASSWORD_PATTERN_FLAGS, message=message) for pattern, message in PASSWORD_PATTERNS]


# -----
# Forms
# -----

class LoginForm(FlaskForm):
    username = StringField('Username', validators=[DataRequired(message='Please provide a username')] + username_validators)
    password = PasswordField('Password', validators=[DataRequired(message='Please provide a password.')] + password_validators)


class SetupForm(FlaskForm):
    username = StringField('Username', validators=[DataRequired(message='Please provide a username')] + username_validators)
    password = PasswordField('Password', validators=[DataRequired(message='Please provide a password.')] + password_validators)


class CreateUserForm(SetupForm):
    admin = BooleanField('Administrator')


class UpdateUserForm(FlaskForm):
    old_username = StringField('User to update (administrators only)', validators=[Optional()])
    new_username = StringField('New username', validators=[Optional()] + username_validators)
    new_password = PasswordField('New password', validators=[Optional()] + password_validators)
    new_keys = BooleanField('Generate new API keys')
    admin = SelectField('Administrator status',
                        choices=[('', 'Unchanged'), ('grant', 'Grant'), ('revoke', 'Revoke')],
                        default='')


class DeleteUserForm(FlaskForm):
    username = StringField('User to delete (administrators only)', validators=[Optional()])


class PostForm(FlaskForm):
    title = StringField('Title', validators=[
        DataRequired(message='Please provide a title.'),
        Length(min=TITLE_MIN_LENGTH, message=f'Your post title must contain at least {TITLE_MIN_LENGTH} characters.'),
        Length(max=TITLE_MAX_LENGTH, message=f'Your post title must contain at most {TITLE_MAX_LENGTH} characters.'),
    ])
    body = TextAreaField('Body', validators=[
        DataRequired(message='Please post something!'),
        Length(min=BODY_MIN_LENGTH, message=f'Your post must contain at least {BODY_MIN_LENGTH} characters.'),
        Length(max=BODY_MAX_LENGTH, message=f'Your post must contain at most {BODY_MAX_LENGTH:,} characters.'),
    ])
