"""Blueprint registrations for application routes."""

from flask import Flask

from .items import blueprint as items_blueprint
from .taxes import blueprint as taxes_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(taxes_blueprint)
    app.register_blueprint(items_blueprint)
