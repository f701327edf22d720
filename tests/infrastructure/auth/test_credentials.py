import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import AsyncMock

from rtdb_admin.core.entities import AccessToken
from rtdb_admin.infrastructure.auth import (
    CachingCredentialProvider,
    EmulatorCredentialProvider,
    StaticTokenProvider,
)


@pytest.mark.asyncio
async def test_static_token():
    token = await StaticTokenProvider("abc").get_access_token()
    assert token.token == "abc"
    assert token.expiry is None
    assert not token.is_expired()


def test_static_token_requires_value():
    with pytest.raises(ValueError):
        StaticTokenProvider("")


@pytest.mark.asyncio
async def test_emulator_token():
    token = await EmulatorCredentialProvider().get_access_token()
    assert token.token == "owner"


def test_token_expiry():
    now = datetime.now(timezone.utc)
    assert AccessToken("t", now - timedelta(seconds=1)).is_expired()
    assert not AccessToken("t", now + timedelta(hours=1)).is_expired()
    assert AccessToken("t", now + timedelta(minutes=1)).is_expired(timedelta(minutes=5))


@pytest.mark.asyncio
async def test_caching_provider_reuses_valid_token():
    expiry = datetime.now(timezone.utc) + timedelta(hours=1)
    fetch = AsyncMock(return_value=AccessToken("t1", expiry))
    provider = CachingCredentialProvider(fetch)

    first = await provider.get_access_token()
    second = await provider.get_access_token()

    assert first is second
    fetch.assert_awaited_once()


@pytest.mark.asyncio
async def test_caching_provider_refreshes_expiring_token():
    soon = datetime.now(timezone.utc) + timedelta(minutes=1)
    later = datetime.now(timezone.utc) + timedelta(hours=1)
    fetch = AsyncMock(side_effect=[AccessToken("t1", soon), AccessToken("t2", later)])
    provider = CachingCredentialProvider(fetch)

    assert (await provider.get_access_token()).token == "t1"
    assert (await provider.get_access_token()).token == "t2"
    assert fetch.await_count == 2


@pytest.mark.asyncio
async def test_caching_provider_shares_concurrent_refresh():
    fetch = AsyncMock(return_value=AccessToken("t1"))
    provider = CachingCredentialProvider(fetch)

    tokens = await asyncio.gather(*(provider.get_access_token() for _ in range(5)))

    assert {t.token for t in tokens} == {"t1"}
    fetch.assert_awaited_once()


@pytest.mark.asyncio
async def test_caching_provider_propagates_fetch_errors():
    fetch = AsyncMock(side_effect=RuntimeError("metadata server unavailable"))
    provider = CachingCredentialProvider(fetch)

    with pytest.raises(RuntimeError, match="metadata server unavailable"):
        await provider.get_access_token()


def test_naive_expiry_is_treated_as_utc():
    naive = datetime(2030, 1, 1, 12, 0)
    token = AccessToken("t", naive)
    assert token.expiry == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert not token.is_expired()
    assert AccessToken("t", datetime(2000, 1, 1)).is_expired()


@pytest.mark.asyncio
async def test_caching_provider_accepts_naive_expiry():
    naive_expiry = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=1)
    fetch = AsyncMock(return_value=AccessToken("t1", naive_expiry))
    provider = CachingCredentialProvider(fetch)

    first = await provider.get_access_token()
    second = await provider.get_access_token()

    assert first is second
    fetch.assert_awaited_once()
