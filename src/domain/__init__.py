"""Domain layer - Pure business logic.

This layer contains the integration credential entity, the normalized
provider error taxonomy and the protocols (ports) the infrastructure layer
implements. The domain layer has NO dependencies on any framework or
infrastructure - it is pure Python.

Structure:
- entities/: Domain entities (mutable, have identity)
- enums/: Normalized failure kinds
- errors/: Provider and credential resolution errors
- protocols/: Credential store interfaces

The domain layer defines WHAT the business does, not HOW it's implemented.
"""
