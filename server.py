"""
LayerLab — HTTP API
Exposes compile and render to the browser editor.

Run:
    python server.py
    → http://127.0.0.1:7860
"""

import logging

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from core.compiler import (
    DescriptorError,
    clamp_intensity,
    compile as compile_preset,
    compile_settings,
    to_css,
)
from core.image_io import decode_image, encode_png
from core.operations import describe
from core.render import render
from core.safety import InvalidDimensions, SafetyError, validate_chain_depth
from effects import list_operations, list_blend_modes
from presets import list_all, get_preset

logger = logging.getLogger(__name__)

app = FastAPI(title="LayerLab")

MAX_UPLOAD_SIZE = 25 * 1024 * 1024  # 25MB limit

ERROR_RECOVERY = {
    "upload_failed": {"code": "UPLOAD_FAILED", "hint": "Check the file format and try again.", "action": "retry"},
    "file_too_large": {"code": "FILE_TOO_LARGE", "hint": "Try a smaller image.", "action": None},
    "invalid_dimensions": {"code": "INVALID_DIMENSIONS", "hint": "The image is empty or too large to render.", "action": None},
    "render_failed": {"code": "RENDER_FAILED", "hint": "Try a lower intensity or a different preset.", "action": "retry"},
}


def _error_detail(key: str, message: str) -> dict:
    """Build structured error detail dict for the frontend."""
    recovery = ERROR_RECOVERY.get(key, {})
    return {
        "detail": message,
        "code": recovery.get("code", "UNKNOWN"),
        "hint": recovery.get("hint", ""),
        "action": recovery.get("action"),
    }


class CompileRequest(BaseModel):
    preset: str
    intensity: float = 100
    full: bool = False  # full-strength base settings instead of the intensity curve


def _program(preset: str, intensity: float, full: bool) -> tuple:
    return compile_settings(preset) if full else compile_preset(preset, intensity)


@app.get("/api/presets")
async def get_presets():
    """All presets in display order."""
    return [
        {
            "name": p.name,
            "label": p.label,
            "description": p.description,
            "settings": p.settings.as_dict(),
        }
        for p in list_all()
    ]


@app.get("/api/operations")
async def get_operations():
    """Operation kinds and blend modes the renderer understands."""
    return {"operations": list_operations(), "blend_modes": list_blend_modes()}


@app.post("/api/compile")
async def compile_endpoint(req: CompileRequest):
    """Compile a preset. css is null when the program has no CSS equivalent."""
    ops = _program(req.preset, req.intensity, req.full)
    try:
        css = to_css(ops)
    except DescriptorError:
        css = None
    return {
        "preset": req.preset if get_preset(req.preset) is not None else "original",
        "intensity": clamp_intensity(req.intensity),
        "operations": [describe(op) for op in ops],
        "css": css,
    }


@app.post("/api/render")
async def render_endpoint(
    file: UploadFile = File(...),
    preset: str = Form("original"),
    intensity: float = Form(100),
    full: bool = Form(False),
):
    """Render an uploaded image through a preset and return PNG bytes."""
    data = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(data) > MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=413,
            detail=_error_detail("file_too_large", f"Upload exceeds {MAX_UPLOAD_SIZE // (1024 * 1024)}MB"),
        )

    try:
        pixels = decode_image(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=_error_detail("upload_failed", str(e)))

    try:
        program = _program(preset, intensity, full)
        validate_chain_depth(program)
        out = render(pixels, program)
    except InvalidDimensions as e:
        raise HTTPException(status_code=400, detail=_error_detail("invalid_dimensions", str(e)))
    except SafetyError as e:
        logger.exception("Render failed")
        raise HTTPException(status_code=400, detail=_error_detail("render_failed", str(e)))

    return Response(content=encode_png(out), media_type="image/png")


def start():
    import uvicorn
    print("LayerLab — launching at http://127.0.0.1:7860")
    uvicorn.run(app, host="127.0.0.1", port=7860, log_level="warning")


if __name__ == "__main__":
    start()
