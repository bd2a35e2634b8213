"""Test helpers shared across unit, API and integration tests."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from src.domain.entities.integration_credential import IntegrationCredential

MURAL_BASE_URL = "https://api.mural.test"
TEST_SUBJECT = "user-123"


def make_credential(
    account_identifier: str = "acme",
    *,
    base_url: str | None = MURAL_BASE_URL,
    api_key: str | None = "k1",
    transfer_api_key: str | None = None,
    expiry_date: datetime | None = None,
    provider_type: str = "mural",
    **extra: Any,
) -> IntegrationCredential:
    """Build an IntegrationCredential for tests.

    Keys passed as None are left out of the credential map.
    """
    credentials: dict[str, Any] = {
        "baseUrl": base_url,
        "apiKey": api_key,
        "transferApiKey": transfer_api_key,
        **extra,
    }
    return IntegrationCredential(
        id=uuid4(),
        provider_type=provider_type,
        account_identifier=account_identifier,
        credentials={k: v for k, v in credentials.items() if v is not None},
        expiry_date=expiry_date,
    )


class FakeCredentialLookup:
    """In-memory credential store that counts reads."""

    def __init__(self, *credentials: IntegrationCredential) -> None:
        self.records: dict[tuple[str, str], IntegrationCredential] = {
            (c.provider_type, c.account_identifier): c for c in credentials
        }
        self.calls: list[tuple[str, str]] = []

    def put(self, credential: IntegrationCredential) -> None:
        self.records[(credential.provider_type, credential.account_identifier)] = (
            credential
        )

    async def find_one(
        self,
        *,
        provider_type: str,
        account_identifier: str,
    ) -> IntegrationCredential | None:
        self.calls.append((provider_type, account_identifier))
        return self.records.get((provider_type, account_identifier))


class ManualClock:
    """Monotonic clock advanced explicitly by tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement recording requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeCredentialRepository(FakeCredentialLookup):
    """In-memory IntegrationCredentialRepository.

    Also satisfies the lookup protocol, so one instance can back both the
    credential endpoints and the provider factory.
    """

    async def find_by_id(self, credential_id: UUID) -> IntegrationCredential | None:
        return next(
            (c for c in self.records.values() if c.id == credential_id),
            None,
        )

    def _matching(
        self,
        provider_type: str | None,
        account_identifier: str | None,
    ) -> list[IntegrationCredential]:
        return [
            c
            for c in self.records.values()
            if (provider_type is None or c.provider_type == provider_type)
            and (account_identifier is None or c.account_identifier == account_identifier)
        ]

    async def list_all(
        self,
        *,
        provider_type: str | None = None,
        account_identifier: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[IntegrationCredential]:
        matching = sorted(
            self._matching(provider_type, account_identifier),
            key=lambda c: c.created_at,
            reverse=True,
        )[offset:]
        return matching if limit is None else matching[:limit]

    async def count(
        self,
        *,
        provider_type: str | None = None,
        account_identifier: str | None = None,
    ) -> int:
        return len(self._matching(provider_type, account_identifier))

    async def save(self, credential: IntegrationCredential) -> None:
        stale = [key for key, c in self.records.items() if c.id == credential.id]
        for key in stale:
            del self.records[key]
        self.put(credential)

    async def delete(self, credential_id: UUID) -> bool:
        for key, credential in list(self.records.items()):
            if credential.id == credential_id:
                del self.records[key]
                return True
        return False
