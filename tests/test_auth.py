"""Tests for blog API key checks."""

import logging

import pytest

from blog_mcp.auth import READ_SCOPES, BearerTokenVerifier, get_auth_provider
from blog_mcp.config import Config

API_KEY = "blog-reader-api-key-0123456789abcdef"


@pytest.fixture
def private_blog(monkeypatch):
    monkeypatch.setenv("BLOG_AUTH_TOKEN", API_KEY)
    return BearerTokenVerifier(Config.from_env())


@pytest.fixture
def public_blog(monkeypatch):
    monkeypatch.delenv("BLOG_AUTH_TOKEN", raising=False)
    return BearerTokenVerifier(Config.from_env())


class TestBearerTokenVerifier:
    @pytest.mark.asyncio
    async def test_public_blog_admits_anyone(self, public_blog):
        result = await public_blog.verify_token("whatever")
        assert result.client_id == "anonymous"
        assert result.scopes == ["read"]

        result = await public_blog.verify_token("")
        assert result.token == "anonymous"

    @pytest.mark.asyncio
    async def test_missing_key_rejected(self, private_blog, caplog):
        with caplog.at_level(logging.WARNING):
            assert await private_blog.verify_token("") is None
        assert any("no API key" in r.message for r in caplog.records)

    @pytest.mark.asyncio
    async def test_wrong_key_rejected(self, private_blog):
        assert await private_blog.verify_token("not-the-key") is None
        assert await private_blog.verify_token(API_KEY + "x") is None

    @pytest.mark.asyncio
    async def test_matching_key_gets_read_only_access(self, private_blog):
        result = await private_blog.verify_token(API_KEY)
        assert result.client_id == "authenticated"
        assert result.token == API_KEY
        assert result.scopes == ["read"]

    @pytest.mark.asyncio
    async def test_grants_do_not_share_scope_list(self, private_blog):
        result = await private_blog.verify_token(API_KEY)
        result.scopes.append("write")
        assert READ_SCOPES == ["read"]


class TestGetAuthProvider:
    def test_private_blog_gets_verifier(self, monkeypatch):
        monkeypatch.setenv("BLOG_AUTH_TOKEN", API_KEY)
        assert isinstance(get_auth_provider(Config.from_env()), BearerTokenVerifier)

    def test_public_blog_has_no_provider(self, monkeypatch):
        monkeypatch.delenv("BLOG_AUTH_TOKEN", raising=False)
        assert get_auth_provider(Config.from_env()) is None
