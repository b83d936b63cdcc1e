"""
High-level use cases for the tribute backend.

Each service orchestrates the collection store to implement the rules of one
collection (required fields, record shape, duplicate-id policy).

Routers (FastAPI endpoints and the serverless handlers) call these services
instead of touching the JSON files directly.
"""
