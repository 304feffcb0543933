"""Model selection and request payloads for Real-CUGAN upscaling."""

from __future__ import annotations

import base64

REPO = "shichen1231/Real-CUGAN"
MAX_PIXELS_FOR_HIGH_SCALE = 400000
JPEG_PREFIX = "data:image/jpeg;base64,"
PNG_PREFIX = "data:image/png;base64,"


def select_model(spell: str, width: int, height: int) -> tuple[int, str]:
    """Return (scale, denoise branch) chosen from the spell text and image size."""
    small = width * height < MAX_PIXELS_FOR_HIGH_SCALE
    scale = 2
    if "双重吟唱" in spell:
        scale = 2
    elif "三重吟唱" in spell and small:
        scale = 3
    elif "四重吟唱" in spell and small:
        scale = 4

    con = "conservative"
    if "强力术式" in spell:
        con = "denoise3x"
    elif "中等术式" in spell:
        con = "denoise2x" if scale == 2 else "no-denoise"
    elif "弱术式" in spell:
        con = "denoise1x" if scale == 2 else "no-denoise"
    elif "不变式" in spell:
        con = "no-denoise"
    elif "原式" in spell:
        con = "conservative"
    return scale, con


def model_name(scale: int, con: str) -> str:
    """Return the model file name for a scale and branch."""
    return f"up{scale}x-latest-{con}.pth"


def build_payload(image_data: bytes, model: str) -> dict:
    """Return the prediction request body for an image."""
    encoded = JPEG_PREFIX + base64.b64encode(image_data).decode("ascii")
    return {"data": [encoded, model, 2]}