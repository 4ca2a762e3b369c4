"""
FastAPI routers for all API endpoints.

Each module defines a router for one resource (auth, authors, categories,
articles). Mutating routes depend on get_authenticated_user.
"""
