import pytest
from unittest.mock import patch

from rtdb_admin.infrastructure.database import DatabaseFactory
from rtdb_admin.utils import DatabaseSettings


@pytest.fixture
def settings():
    return DatabaseSettings(
        _env_file=None,
        database_url="https://test-db.firebaseio.com",
        access_token="settings-token",
        timeout=5,
        pool_size=2,
    )


@pytest.mark.asyncio
async def test_create_client_from_settings(settings, session):
    client = DatabaseFactory.create_client(settings, session=session)

    assert client.base_url == "https://test-db.firebaseio.com"
    await client.reference("a").get()
    assert session.last["headers"]["Authorization"] == "Bearer settings-token"


def test_create_client_with_auth_override(settings):
    settings.auth_variable_override = {"uid": "user1"}
    client = DatabaseFactory.create_client(settings)
    assert client.auth_override == '{"uid":"user1"}'


@pytest.mark.asyncio
async def test_explicit_credential_wins(settings, credential, session):
    client = DatabaseFactory.create_client(settings, credential=credential, session=session)
    await client.reference().get()
    assert session.last["headers"]["Authorization"] == "Bearer mock-token"


@pytest.mark.asyncio
async def test_create_emulator_client(session):
    settings = DatabaseSettings(
        _env_file=None,
        database_url="https://my-db.firebaseio.com",
        database_emulator_host="localhost:9000",
    )
    client = DatabaseFactory.create_client(settings, session=session)

    await client.reference().get()

    assert session.last["url"] == "http://localhost:9000/.json"
    assert session.last["params"] == {"ns": "my-db"}
    assert session.last["headers"]["Authorization"] == "Bearer owner"


def test_missing_url():
    with pytest.raises(ValueError, match="database URL is required"):
        DatabaseFactory.create_client(DatabaseSettings(_env_file=None))


def test_missing_credential():
    settings = DatabaseSettings(_env_file=None, database_url="https://test-db.firebaseio.com")
    with pytest.raises(ValueError):
        DatabaseFactory.create_client(settings)


def test_settings_loaded_when_omitted(settings):
    with patch(
        "rtdb_admin.infrastructure.database.factory.get_database_settings",
        return_value=settings
    ) as mock_settings:
        client = DatabaseFactory.create_client()

    mock_settings.assert_called_once()
    assert client.base_url == "https://test-db.firebaseio.com"
