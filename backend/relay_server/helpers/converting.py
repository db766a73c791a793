import base64


def to_data_url(file: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(file).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
