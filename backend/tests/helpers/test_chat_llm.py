from unittest.mock import AsyncMock, MagicMock

import pytest
from relay_server.config import Settings
from relay_server.errors import UpstreamError
from relay_server.helpers.chat_llm import chat_with_llm

settings = Settings(openai_api_key="test-key", backoff_seconds=0)


def make_completion(content, model="gpt-4o-mini", usage=None):
    mock_message = MagicMock()
    mock_message.content = content

    mock_choice = MagicMock()
    mock_choice.message = mock_message

    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    mock_response.model = model
    mock_response.usage = usage
    return mock_response


@pytest.mark.asyncio
async def test_chat_with_llm():
    # Arrange
    mock_messages = [
        {"role": "user", "content": "Hello"},
        {"role": "assistant", "content": "Hi there!"},
        {"role": "user", "content": "How are you?"},
    ]
    mock_usage = MagicMock()
    mock_usage.model_dump.return_value = {"total_tokens": 12}

    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(
        return_value=make_completion("I am fine", usage=mock_usage)
    )

    # Act
    result = await chat_with_llm(mock_client, mock_messages, settings)

    # Assert
    mock_client.chat.completions.create.assert_awaited_once_with(
        model="gpt-4o-mini",
        messages=mock_messages,
        temperature=0.7,
        max_tokens=500,
        timeout=60.0,
    )
    assert result.message == "I am fine"
    assert result.usage == {"total_tokens": 12}
    assert result.model == "gpt-4o-mini"


@pytest.mark.asyncio
async def test_chat_with_llm_without_usage():
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(
        return_value=make_completion("Hello", usage=None)
    )

    result = await chat_with_llm(mock_client, [], settings)

    assert result.message == "Hello"
    assert result.usage is None


@pytest.mark.asyncio
async def test_chat_with_llm_empty_reply():
    mock_client = MagicMock()
    mock_client.chat.completions.create = AsyncMock(return_value=make_completion(""))

    with pytest.raises(UpstreamError) as exc_info:
        await chat_with_llm(mock_client, [], settings)

    assert exc_info.value.status_code == 502
