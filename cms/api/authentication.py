from flask import current_app, request
from werkzeug.exceptions import Forbidden, Unauthorized

from cms import basic_auth
from cms.models import User


@basic_auth.verify_password
def verify_password(api_key, api_secret):
    """Resolve the API key (username) and API secret (password) to a user."""
    if not api_key or not api_secret:
        return None

    user = User.query.filter_by(api_key=api_key).first()
    if user and user.is_api_secret_correct(api_secret):
        return user

    current_app.logger.info(f'Invalid API credentials received from IP address: {request.remote_addr}')
    return None


@basic_auth.error_handler
def basic_auth_error(status=401):
    error = (Forbidden if status == 403 else Unauthorized)()
    return {
        'code': error.code,
        'name': error.name,
        'description': 'Missing or invalid API credentials.',
    }, error.code, {'WWW-Authenticate': 'Basic realm="Authentication Required"'}
