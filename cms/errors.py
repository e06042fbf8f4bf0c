from flask import current_app, flash, json, render_template, request
from werkzeug.exceptions import HTTPException


class RequestError(HTTPException):
    """HTTP error raised by the route handlers.

    For the dashboard pages, the error can name the template to render again
    (e.g. the form that was submitted) along with the context it needs.
    """

    def __init__(self, code: int, description: str, template: str = None, **context):
        super().__init__(description)
        self.code = code
        self.template = template
        self.context = context


def is_api_request():
    return request.path.startswith('/api')


def handle_http_exception(e):
    """Return JSON for API errors and an HTML page for page errors."""
    if is_api_request():
        # Start with the correct headers and status code from the error
        response = e.get_response()
        # Replace the body with JSON
        response.data = json.dumps({
            'code': e.code,
            'name': e.name,
            'description': e.description,
        })
        response.content_type = 'application/json'
        return response

    if isinstance(e, RequestError) and e.template is not None:
        flash(e.description, 'error')
        return render_template(e.template, **e.context), e.code

    if e.code is None or e.code >= 500:
        current_app.logger.error(f'Unexpected error ({e.code}) on {request.path}: {e.description}')
    return render_template('error.html', error=e), e.code or 500


def handle_validation_error(status_code, messages):
    """Error handler for the API schema validation (APIFairy)."""
    return {
        'code': status_code,
        'name': 'Bad Request',
        'description': 'There were issues validating your submission.',
        'messages': messages,
    }, status_code
