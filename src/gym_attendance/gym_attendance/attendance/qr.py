from __future__ import annotations

import io
import secrets
import string
from datetime import datetime
from typing import BinaryIO

import qrcode
from PIL import Image

from ..core.constants import QR_CODE_PREFIX
from ..core.exceptions import InvalidQRCodeError

_BASE36 = string.digits + string.ascii_lowercase


def generate_code(now: datetime) -> str:
    """``GYM-<epoch millis>-<9 random base36 chars>``."""
    millis = int(now.timestamp() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{QR_CODE_PREFIX}-{millis}-{suffix}"


def render_qr_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_qr_image(stream: BinaryIO) -> str:
    """Return the text of the first QR code found in an uploaded image."""
    # needs the zbar system library, loaded only when an image is scanned
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except OSError:
        raise InvalidQRCodeError("Uploaded file is not a readable image")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise InvalidQRCodeError("No QR code found in the image")
    return decoded[0].data.decode("utf-8").strip()
