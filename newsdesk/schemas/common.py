from typing import Any


def envelope(code: int, message: str, data: Any = None, *, status: str | None = None) -> dict[str, Any]:
    return {
        "code": code,
        "status": status or ("success" if code < 400 else "error"),
        "message": message,
        "data": data,
    }


def required_text(value: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValueError("must not be blank")
    return text
