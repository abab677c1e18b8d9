"""wikiserve — static, wiki and page content server."""

from flask import Flask
from .blueprint import create_blueprint


def create_app(config=None):
    # The blueprint owns /static/, so Flask's built-in static route is disabled.
    app = Flask(__name__, static_folder=None)
    app.register_blueprint(create_blueprint(config=config), url_prefix="/")
    return app
