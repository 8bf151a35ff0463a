"""ASGI entrypoint for the user management API."""

from user_management.api.app import create_app
from user_management.containers import build_container

app = create_app(build_container())
