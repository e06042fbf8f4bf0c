"""
The 'pages' blueprint handles the dashboard pages of the CMS.
Specifically, this blueprint allows users to log in and out, to manage
their blog posts and their account, and allows administrators to manage
the accounts of other users.
"""
from flask import Blueprint


pages_blueprint = Blueprint('pages', __name__, template_folder='templates')

from . import routes
