"""Mural Pay provider package.

Provides the per-tenant HTTP client for the Mural Pay API (accounts,
organizations, payouts, fee quotes, transactions).
Uses API Key authentication (``Authorization: Bearer <apiKey>``), plus a
separate transfer API key for executing and cancelling payouts.

Reference:
    - https://developers.muralpay.com/
"""

from src.infrastructure.providers.mural.mural_provider import MuralProvider

__all__ = ["MuralProvider"]
