"""Application layer - Use cases and orchestration.

This layer sits between the HTTP handlers and the provider/credential
adapters:
- errors/: ApplicationError and the mapping from provider error kinds
- services/: Caller-side retry of throttled provider calls

The application layer orchestrates infrastructure calls but contains no
HTTP or persistence details.
"""
