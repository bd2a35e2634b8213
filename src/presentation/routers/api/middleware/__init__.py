"""HTTP middleware and request dependencies (tracing, authentication)."""
