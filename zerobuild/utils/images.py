"""이미지 / data URI 변환"""
import base64
import binascii
import re
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)


def to_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> Tuple[bytes, str]:
    """data URI -> (bytes, mime). 형식이 틀리면 ValueError."""
    match = DATA_URI_PATTERN.match(uri or "")
    if not match:
        raise ValueError("Not a base64 data URI")
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}")
    return data, match.group("mime")


def is_image(data: bytes) -> bool:
    """Pillow로 열리는지 확인"""
    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
        return True
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return False


def to_png_bytes(data: bytes) -> bytes:
    """다운로드용 PNG 재인코딩"""
    with Image.open(BytesIO(data)) as img:
        buffer = BytesIO()
        img.save(buffer, format="PNG")
    return buffer.getvalue()
