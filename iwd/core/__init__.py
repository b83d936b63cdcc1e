"""
Core utilities shared across the tribute backend.

This package hosts configuration (env vars, data paths, deployment mode),
logging setup and small clock helpers. Routers, services and repositories
depend on these primitives instead of reading the environment themselves.
"""
