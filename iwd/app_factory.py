"""Entry points for the standing server and the per-collection serverless functions."""
from iwd.app import app, create_app
from iwd.functions import create_function_app, nominations, pledges, postcards, wishes

__all__ = [
    "app",
    "create_app",
    "create_function_app",
    "wishes",
    "pledges",
    "nominations",
    "postcards",
]
