"""Application environment types.

Defines the runtime environments the proxy is deployed into.
Used by Settings to determine environment-specific behavior.

Environments:
- DEVELOPMENT: Local development with reload and coloured logs
- TESTING: Automated test execution with isolated credential store
- CI: Continuous integration environment
- PRODUCTION: Production deployment behind the API gateway
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
