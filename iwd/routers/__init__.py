"""
FastAPI routers grouped by concern.

Each module inside this package exposes an APIRouter that can be included in
the main application (app.py); the request helpers in collections.py are
shared with the serverless functions.
"""
