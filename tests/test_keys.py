"""Tests for API key providers."""

from __future__ import annotations

import httpx
import pytest

from elite.keys import KeyReader, StaticKeyProvider


class TestKeyReader:
    @pytest.mark.asyncio
    async def test_reads_and_trims_file(self, tmp_path):
        key_file = tmp_path / "openai.key"
        key_file.write_text("  sk-abc123abc123abc123abc  \n")

        reader = KeyReader()
        assert await reader.get_secret(str(key_file)) == "sk-abc123abc123abc123abc"

    @pytest.mark.asyncio
    async def test_caches_after_first_read(self, tmp_path):
        key_file = tmp_path / "openai.key"
        key_file.write_text("sk-first-key-0000000000")

        reader = KeyReader()
        first = await reader.get_secret(str(key_file))
        key_file.write_text("sk-second-key-111111111")

        assert await reader.get_secret(str(key_file)) == first

        reader.clear()
        assert await reader.get_secret(str(key_file)) == "sk-second-key-111111111"

    @pytest.mark.asyncio
    async def test_missing_file_returns_empty(self, tmp_path):
        reader = KeyReader()
        assert await reader.get_secret(str(tmp_path / "nope.key")) == ""

    @pytest.mark.asyncio
    async def test_undecodable_file_returns_empty(self, tmp_path):
        key_file = tmp_path / "openai.key"
        key_file.write_bytes(b"\xff\xfesk-\x80\x81")

        reader = KeyReader()
        assert await reader.get_secret(str(key_file)) == ""

    @pytest.mark.asyncio
    async def test_empty_key_not_cached(self, tmp_path):
        key_file = tmp_path / "openai.key"
        key_file.write_text("   ")

        reader = KeyReader()
        assert await reader.get_secret(str(key_file)) == ""

        key_file.write_text("sk-now-present-00000000")
        assert await reader.get_secret(str(key_file)) == "sk-now-present-00000000"

    @pytest.mark.asyncio
    async def test_url_fetch_failure_returns_empty(self, monkeypatch):
        async def failing_fetch(self, url):
            raise httpx.ConnectError("unreachable")

        monkeypatch.setattr(KeyReader, "_fetch", failing_fetch)

        reader = KeyReader()
        assert await reader.get_secret("http://localhost:4200/assets/openai.key") == ""

    @pytest.mark.asyncio
    async def test_url_fetch_success(self, monkeypatch):
        async def fetch(self, url):
            return "sk-from-url-000000000000\n"

        monkeypatch.setattr(KeyReader, "_fetch", fetch)

        reader = KeyReader()
        key = await reader.get_secret("https://config.example.com/openai.key")
        assert key == "sk-from-url-000000000000"


class TestStaticKeyProvider:
    @pytest.mark.asyncio
    async def test_returns_inline_secret(self):
        provider = StaticKeyProvider(" sk-inline-000000000000 ")
        assert await provider.get_secret("ignored") == "sk-inline-000000000000"
