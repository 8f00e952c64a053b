"""Tests for settings parsing and token decoding."""

from jose import jwt

from tourism_directory.core import Settings, decode_access_token, get_settings
from tourism_directory.store import InMemoryRecordStore, make_store
from tests.conftest import make_token


class TestSettings:
    def test_async_url_from_plain_postgres(self):
        s = Settings(database_url="postgresql://u:p@db/app")
        assert s.async_database_url == "postgresql+asyncpg://u:p@db/app"

    def test_async_url_from_render_style_url(self):
        s = Settings(database_url="postgres://u:p@db/app")
        assert s.async_database_url == "postgresql+asyncpg://u:p@db/app"

    def test_async_url_left_alone(self):
        url = "postgresql+asyncpg://u:p@db/app"
        assert Settings(database_url=url).async_database_url == url

    def test_cors_origins_list(self):
        s = Settings(cors_origins="https://a.example, https://b.example ,")
        assert s.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_blank_cors_allows_all(self):
        assert Settings(cors_origins="  ").cors_origins_list == ["*"]

    def test_test_environment_uses_memory_store(self):
        assert get_settings().store_backend == "memory"

    def test_memory_backend_is_shared(self):
        store = make_store()
        assert isinstance(store, InMemoryRecordStore)
        assert make_store() is store


class TestDecodeAccessToken:
    def test_valid_token(self):
        assert decode_access_token(make_token("user-42")) == "user-42"

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "user-42"}, "other-secret", algorithm="HS256")
        assert decode_access_token(token) is None

    def test_missing_subject(self):
        s = get_settings()
        token = jwt.encode({"role": "x"}, s.jwt_secret, algorithm=s.jwt_algorithm)
        assert decode_access_token(token) is None

    def test_garbage(self):
        assert decode_access_token("not-a-token") is None
