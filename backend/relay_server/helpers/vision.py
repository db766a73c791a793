from openai import AsyncOpenAI
from relay_server.config import Settings
from relay_server.errors import UpstreamError
from relay_server.helpers.converting import to_data_url
from relay_server.helpers.upstream import call_upstream


def build_image_messages(image: bytes, mime_type: str, prompt: str) -> list[dict]:
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": to_data_url(image, mime_type)}},
            ],
        }
    ]


async def analyze_image(
    client: AsyncOpenAI, image: bytes, mime_type: str, settings: Settings
) -> str:
    messages = build_image_messages(image, mime_type, settings.vision_prompt)

    async def create():
        return await client.chat.completions.create(
            model=settings.vision_model,
            messages=messages,
            max_tokens=settings.vision_max_tokens,
            timeout=settings.vision_timeout_seconds,
        )

    response = await call_upstream(
        "image analysis",
        create,
        max_attempts=settings.max_attempts,
        backoff_seconds=settings.backoff_seconds,
    )

    result = response.choices[0].message.content if response.choices else None
    if not result:
        raise UpstreamError("The model returned an empty analysis.", status_code=502)
    return result
