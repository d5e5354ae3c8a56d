"""Shared test fixtures for the ELiTE test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from elite.llm.base import AIRequest, ProviderConfig
from elite.llm.registry import ProviderRegistry
from elite.llm.transport import TransportResult

TEST_API_KEY = "sk-test-0123456789abcdefghij"


@pytest.fixture
def openai_config():
    """Return the OpenAI provider config used across dispatcher tests."""
    return ProviderConfig(
        name="openai",
        endpoint_url="https://api.openai.com/v1/chat/completions",
        model="gpt-3.5-turbo",
        auth_header_value=f"Bearer {TEST_API_KEY}",
        max_retries=3,
        base_retry_delay_ms=1000,
    )


@pytest.fixture
def registry(openai_config):
    """Create a registry with only ``openai`` registered."""
    reg = ProviderRegistry()
    reg.register("openai", openai_config)
    return reg


@pytest.fixture
def mock_transport():
    """Create a mock transport that answers "4" by default."""
    transport = AsyncMock()
    transport.post.return_value = TransportResult(
        success=True,
        http_status=200,
        body={
            "id": "chatcmpl-123",
            "choices": [{"message": {"role": "assistant", "content": "4"}}],
        },
    )
    return transport


@pytest.fixture
def fake_sleep():
    """Record backoff delays without actually waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def sample_request():
    return AIRequest(question="What is 2+2?")

