"""
The 'api' blueprint handles the JSON API for working with blog posts.
Specifically, this blueprint allows for blog posts to be listed, retrieved,
added, edited, and deleted by a user authenticated with their API key and
API secret.
"""
from flask import Blueprint


api_blueprint = Blueprint('api', __name__)

from . import authentication, routes
