"""Integration tests for IntegrationCredentialRepository.

Tests cover:
- Save and retrieve by ID
- Lookup by (provider_type, account_identifier)
- Filtering, paging and counting
- Update and delete
- Unique (provider_type, account_identifier) index
- DatabaseCredentialLookup feeding the provider factory

Architecture:
- Real SQLAlchemy engine over a throwaway SQLite file (aiosqlite)
- Tables created with Database.create_all (fresh database per test)
"""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError
from uuid_extensions import uuid7

from src.core.result import Success
from src.domain.entities.integration_credential import IntegrationCredential
from src.infrastructure.persistence.credential_lookup import DatabaseCredentialLookup
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.repositories import IntegrationCredentialRepository
from src.infrastructure.providers.provider_factory import ProviderFactory

BASE_TIME = datetime(2026, 1, 15, 9, 0, tzinfo=UTC)


def create_test_credential(
    account_identifier: str = "acme",
    *,
    provider_type: str = "mural",
    minutes: int = 0,
    **kwargs,
) -> IntegrationCredential:
    """Create a credential with distinct, ordered timestamps."""
    stamp = BASE_TIME + timedelta(minutes=minutes)
    return IntegrationCredential(
        id=uuid7(),
        provider_type=provider_type,
        account_identifier=account_identifier,
        credentials=kwargs.pop(
            "credentials",
            {"baseUrl": "https://api.mural.test", "apiKey": "k1"},
        ),
        created_at=stamp,
        updated_at=stamp,
        **kwargs,
    )


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'credentials.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


async def _save(database: Database, *credentials: IntegrationCredential) -> None:
    async with database.get_session() as session:
        repo = IntegrationCredentialRepository(session)
        for credential in credentials:
            await repo.save(credential)


@pytest.mark.integration
class TestIntegrationCredentialRepositorySave:
    async def test_save_and_find_by_id(self, database: Database):
        credential = create_test_credential(
            credentials={
                "baseUrl": "https://api.mural.test",
                "apiKey": "k1",
                "transferApiKey": "t1",
                "webhookSecret": "w1",
            },
            expiry_date=BASE_TIME + timedelta(days=30),
            version="v2",
            automatic_update=True,
            created_by="user-1",
            updated_by="user-1",
        )
        await _save(database, credential)

        async with database.get_session() as session:
            found = await IntegrationCredentialRepository(session).find_by_id(
                credential.id
            )

        assert found is not None
        assert found.id == credential.id
        assert found.credentials["webhookSecret"] == "w1"
        assert found.transfer_api_key == "t1"
        assert found.expiry_date == BASE_TIME + timedelta(days=30)
        assert found.version == "v2"
        assert found.automatic_update is True
        assert found.created_by == "user-1"

    async def test_find_by_id_missing(self, database: Database):
        async with database.get_session() as session:
            assert await IntegrationCredentialRepository(session).find_by_id(uuid7()) is None

    async def test_update_existing(self, database: Database):
        credential = create_test_credential()
        await _save(database, credential)

        credential.credentials = {"baseUrl": "https://new.mural.test", "apiKey": "k2"}
        credential.updated_by = "user-2"
        await _save(database, credential)

        async with database.get_session() as session:
            repo = IntegrationCredentialRepository(session)
            found = await repo.find_by_id(credential.id)
            total = await repo.count()

        assert total == 1
        assert found.base_url == "https://new.mural.test"
        assert found.updated_by == "user-2"

    async def test_duplicate_provider_account_rejected(self, database: Database):
        await _save(database, create_test_credential("acme"))

        with pytest.raises(IntegrityError):
            await _save(database, create_test_credential("acme"))

    async def test_same_account_different_provider_allowed(self, database: Database):
        await _save(
            database,
            create_test_credential("acme"),
            create_test_credential("acme", provider_type="other", minutes=1),
        )

        async with database.get_session() as session:
            assert await IntegrationCredentialRepository(session).count() == 2


@pytest.mark.integration
class TestIntegrationCredentialRepositoryQueries:
    async def test_find_one(self, database: Database):
        await _save(
            database,
            create_test_credential("acme"),
            create_test_credential("globex", minutes=1),
        )

        async with database.get_session() as session:
            repo = IntegrationCredentialRepository(session)
            found = await repo.find_one(provider_type="mural", account_identifier="globex")
            missing = await repo.find_one(
                provider_type="mural", account_identifier="initech"
            )

        assert found.account_identifier == "globex"
        assert missing is None

    async def test_list_newest_first_with_paging(self, database: Database):
        await _save(
            database,
            create_test_credential("a", minutes=0),
            create_test_credential("b", minutes=1),
            create_test_credential("c", minutes=2),
        )

        async with database.get_session() as session:
            repo = IntegrationCredentialRepository(session)
            everything = await repo.list_all()
            page = await repo.list_all(limit=1, offset=1)

        assert [c.account_identifier for c in everything] == ["c", "b", "a"]
        assert [c.account_identifier for c in page] == ["b"]

    async def test_list_and_count_filters(self, database: Database):
        await _save(
            database,
            create_test_credential("acme"),
            create_test_credential("globex", minutes=1),
            create_test_credential("acme", provider_type="other", minutes=2),
        )

        async with database.get_session() as session:
            repo = IntegrationCredentialRepository(session)
            mural = await repo.list_all(provider_type="mural")
            acme = await repo.list_all(account_identifier="acme")
            mural_count = await repo.count(provider_type="mural")
            acme_mural = await repo.count(provider_type="mural", account_identifier="acme")

        assert {c.account_identifier for c in mural} == {"acme", "globex"}
        assert {c.provider_type for c in acme} == {"mural", "other"}
        assert mural_count == 2
        assert acme_mural == 1

    async def test_delete(self, database: Database):
        credential = create_test_credential()
        await _save(database, credential)

        async with database.get_session() as session:
            repo = IntegrationCredentialRepository(session)
            deleted = await repo.delete(credential.id)
            deleted_again = await repo.delete(credential.id)

        assert deleted is True
        assert deleted_again is False


@pytest.mark.integration
class TestDatabaseCredentialLookup:
    async def test_factory_resolves_stored_credentials(self, database: Database):
        await _save(database, create_test_credential("acme"))
        factory = ProviderFactory(lookup=DatabaseCredentialLookup(database))

        result = await factory.resolve("acme")

        assert isinstance(result, Success)
        assert result.value.base_url == "https://api.mural.test"

    async def test_lookup_missing_returns_none(self, database: Database):
        lookup = DatabaseCredentialLookup(database)

        assert (
            await lookup.find_one(provider_type="mural", account_identifier="nobody")
            is None
        )

    async def test_check_connection(self, database: Database):
        assert await database.check_connection() is True
