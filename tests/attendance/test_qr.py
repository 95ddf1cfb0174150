import io
from datetime import datetime

import pytest

from src.gym_attendance.gym_attendance.attendance.qr import decode_qr_image, generate_code, render_qr_png
from src.gym_attendance.gym_attendance.core.exceptions import InvalidQRCodeError


def test_generate_code_embeds_epoch_millis():
    now = datetime(2025, 6, 15, 10, 0, 0)
    prefix, millis, suffix = generate_code(now).split("-")

    assert prefix == "GYM"
    assert int(millis) == int(now.timestamp() * 1000)
    assert len(suffix) == 9


def test_generate_code_is_random():
    now = datetime(2025, 6, 15, 10, 0, 0)

    assert len({generate_code(now) for _ in range(20)}) == 20


def test_render_qr_png_returns_png_bytes():
    assert render_qr_png("GYM-1-abcdefghi").startswith(b"\x89PNG\r\n\x1a\n")


def test_decode_rendered_code():
    pytest.importorskip("pyzbar.pyzbar")

    assert decode_qr_image(io.BytesIO(render_qr_png("GYM-1-abcdefghi"))) == "GYM-1-abcdefghi"


def test_decode_rejects_non_image():
    pytest.importorskip("pyzbar.pyzbar")

    with pytest.raises(InvalidQRCodeError):
        decode_qr_image(io.BytesIO(b"not an image"))
