"""Presentation layer - API endpoints and HTTP concerns.

This layer contains FastAPI routers and endpoint definitions. The presentation
layer is thin - it resolves a provider client, calls one operation and
translates the Result to an HTTP response.

Structure:
- routers/api/v1/: Mural proxy and integration credential endpoints
- routers/api/middleware/: Trace IDs and bearer authentication
- routers/system.py: Health and root endpoints

The presentation layer depends on the application layer but contains NO
business logic.
"""
