from unittest.mock import AsyncMock, MagicMock

import pytest
from relay_server.config import Settings
from relay_server.helpers.tts import generate_speech

settings = Settings(openai_api_key="test-key", backoff_seconds=0)


@pytest.mark.asyncio
async def test_generate_speech_default_format():
    # Arrange
    mock_text = "Hello world"
    mock_voice = "alloy"
    mock_content = b"fake_audio_content"

    mock_response = MagicMock()
    mock_response.content = mock_content
    mock_client = MagicMock()
    mock_client.audio.speech.create = AsyncMock(return_value=mock_response)

    # Act
    result = await generate_speech(mock_client, mock_text, mock_voice, settings)

    # Assert
    mock_client.audio.speech.create.assert_awaited_once_with(
        model="tts-1",
        voice=mock_voice,
        input=mock_text,
        response_format="mp3",
        timeout=60.0,
    )
    assert result == mock_content


@pytest.mark.asyncio
async def test_generate_speech_custom_format():
    # Arrange
    mock_text = "Hello world"
    mock_voice = "nova"
    mock_format = "wav"
    mock_content = b"fake_audio_content"

    mock_response = MagicMock()
    mock_response.content = mock_content
    mock_client = MagicMock()
    mock_client.audio.speech.create = AsyncMock(return_value=mock_response)

    # Act
    result = await generate_speech(
        mock_client, mock_text, mock_voice, settings, mock_format
    )

    # Assert
    mock_client.audio.speech.create.assert_awaited_once_with(
        model="tts-1",
        voice=mock_voice,
        input=mock_text,
        response_format=mock_format,
        timeout=60.0,
    )
    assert result == mock_content
