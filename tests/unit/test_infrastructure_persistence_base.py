"""Unit tests for the declarative base shared by the credential tables."""

from uuid import UUID

from src.infrastructure.persistence.base import BaseModel, BaseMutableModel
from src.infrastructure.persistence.models.integration_credential import (
    IntegrationCredential,
)


class TestBaseColumns:
    def test_credential_table_has_audit_columns(self):
        columns = IntegrationCredential.__table__.c

        assert columns.id.primary_key
        assert columns.created_at.server_default is not None
        assert columns.updated_at.server_default is not None
        assert columns.updated_at.onupdate is not None

    def test_id_default_is_time_ordered_uuid(self):
        first = IntegrationCredential.__table__.c.id.default.arg(None)
        second = IntegrationCredential.__table__.c.id.default.arg(None)

        assert isinstance(first, UUID)
        assert first.version == 7
        assert first != second

    def test_mutable_model_extends_base(self):
        assert issubclass(IntegrationCredential, BaseMutableModel)
        assert issubclass(BaseMutableModel, BaseModel)

    def test_repr_shows_class_and_id(self):
        row = IntegrationCredential(
            id=UUID("01890a5d-ac96-774b-bcce-b302099a8057"),
            provider_type="mural",
            account_identifier="acme",
            credentials={},
        )

        assert repr(row) == (
            "<IntegrationCredential(id=01890a5d-ac96-774b-bcce-b302099a8057)>"
        )
