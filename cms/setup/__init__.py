"""
The 'setup' blueprint handles the one-time setup of the CMS, which creates
the first administrator account.
"""
from flask import Blueprint


setup_blueprint = Blueprint('setup', __name__, template_folder='templates')

from . import routes
