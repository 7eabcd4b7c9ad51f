"""
Программа: «Taskly» – REST-сервис для управления личными задачами.
Модуль: utils/image_processor.py – обработка аватаров.

Назначение модуля:
- Проверка, что загруженный файл действительно является изображением допустимого формата.
- Приведение аватара к квадрату фиксированного размера в формате PNG.
"""

import io

from PIL import Image, UnidentifiedImageError

from utils.errors import ValidationError


def validate_image_bytes(data: bytes, allowed_formats) -> str:
    """Возвращает формат изображения или выбрасывает ValidationError."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
        # После verify() объект изображения непригоден, открываем заново
        with Image.open(io.BytesIO(data)) as image:
            image_format = (image.format or "").lower()
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Файл не является корректным изображением") from None

    if image_format not in allowed_formats:
        raise ValidationError("Please upload an image")
    return image_format


def make_avatar(data: bytes, size=(250, 250)) -> bytes:
    """Масштабирует изображение до `size` и перекодирует его в PNG."""
    with Image.open(io.BytesIO(data)) as image:
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA")
        resized = image.resize(size)
    buffer = io.BytesIO()
    resized.save(buffer, format="PNG")
    return buffer.getvalue()
