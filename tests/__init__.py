"""Test suite for the Mural proxy API.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic, provider client and factory in isolation
- integration/: Integration tests - repository against a SQLite database
- api/: API endpoint tests - HTTP endpoints through FastAPI TestClient
"""
