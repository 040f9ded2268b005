"""WSGI entry point for production servers."""

from wealthplan.backend.app import create_app

application = create_app()
