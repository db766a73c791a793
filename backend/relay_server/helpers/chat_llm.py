from openai import AsyncOpenAI
from relay_server.config import Settings
from relay_server.errors import UpstreamError
from relay_server.helpers.upstream import call_upstream
from relay_server.schemas.api_chat import ChatResponse


async def chat_with_llm(
    client: AsyncOpenAI, messages: list[dict], settings: Settings
) -> ChatResponse:
    async def create():
        return await client.chat.completions.create(
            model=settings.chat_model,
            messages=messages,
            temperature=settings.chat_temperature,
            max_tokens=settings.chat_max_tokens,
            timeout=settings.chat_timeout_seconds,
        )

    response = await call_upstream(
        "chat completion",
        create,
        max_attempts=settings.max_attempts,
        backoff_seconds=settings.backoff_seconds,
    )

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise UpstreamError("The model returned an empty reply.", status_code=502)

    # Stubbed or partial payloads may omit usage/model
    usage = getattr(response, "usage", None)
    return ChatResponse(
        message=content,
        usage=usage.model_dump() if usage is not None else None,
        model=getattr(response, "model", None),
    )
