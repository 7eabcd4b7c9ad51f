# tests/helpers.py

from __future__ import annotations

import io

from PIL import Image


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def image_bytes(fmt: str = "JPEG", size=(40, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 40, 40)).save(buffer, format=fmt)
    return buffer.getvalue()
