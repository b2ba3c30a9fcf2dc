"""Output encoding via Pillow: format -> MIME type -> encoded bytes."""

import base64
import io
import logging
import warnings
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

MIME_PNG = "image/png"
MIME_JPEG = "image/jpeg"
MIME_PDF = "application/pdf"

# Pillow subsampling codes
SUBSAMPLING_444 = 0
SUBSAMPLING_420 = 2

SVG_SIZE_WARNING = (
    "WARNING!: Using the SVG format should currently be avoided as there is a "
    "bug where it makes the SVG image EXTREMELY large (as in 100 MiB as opposed "
    "to 2 MiB)."
)


class UnsupportedFormatError(TypeError):
    """Raised for output formats that are permanently disabled (PDF)."""


class EncoderError(RuntimeError):
    """Raised when an unrecognized MIME type reaches the encoder."""


class FormatWarning(UserWarning):
    """Emitted for output formats that work but should be avoided (SVG)."""


def resolve_mime_type(fmt: str | None) -> str | None:
    """Map an output format name to a MIME type.

    jpg/jpeg -> image/jpeg, pdf -> application/pdf, svg -> None, and
    everything else (including no format) -> image/png. Case-insensitive.
    """
    fmt = (fmt or "").lower()
    if fmt in ("jpg", "jpeg"):
        return MIME_JPEG
    if fmt == "pdf":
        return MIME_PDF
    if fmt == "svg":
        return None
    return MIME_PNG


def flatten_onto_black(raster: np.ndarray) -> np.ndarray:
    """Composite RGBA onto black, returning (H, W, 3) RGB.

    Transparent pixels become black, the way a premultiplied canvas
    surface encodes to an alpha-less format.
    """
    rgb = raster[:, :, :3].astype(np.float32)
    alpha = raster[:, :, 3:4].astype(np.float32) / 255.0
    return np.clip(np.rint(rgb * alpha), 0, 255).astype(np.uint8)


def encode_png(raster: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(raster).save(buf, format="PNG")
    return buf.getvalue()


def encode_jpeg(
    raster: np.ndarray,
    quality: float = 0.75,
    progressive: bool = False,
    chroma_subsampling: bool = False,
) -> bytes:
    """Encode as JPEG. ``quality`` is a float in [0, 1]; alpha is flattened onto black."""
    q = max(0, min(100, int(round(float(quality) * 100))))
    img = Image.fromarray(flatten_onto_black(raster))
    buf = io.BytesIO()
    img.save(
        buf,
        format="JPEG",
        quality=q,
        progressive=progressive,
        subsampling=SUBSAMPLING_420 if chroma_subsampling else SUBSAMPLING_444,
    )
    return buf.getvalue()


def encode_svg(raster: np.ndarray) -> bytes:
    """Wrap the raster in an SVG document as an embedded base64 PNG."""
    h, w = raster.shape[:2]
    href = "data:image/png;base64," + base64.b64encode(encode_png(raster)).decode("ascii")
    root = ET.Element(
        "svg",
        {
            "xmlns": "http://www.w3.org/2000/svg",
            "xmlns:xlink": "http://www.w3.org/1999/xlink",
            "width": str(w),
            "height": str(h),
            "viewBox": f"0 0 {w} {h}",
        },
    )
    ET.SubElement(
        root,
        "image",
        {"x": "0", "y": "0", "width": str(w), "height": str(h), "xlink:href": href},
    )
    return b'<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root)


def encode(raster: np.ndarray, mime_type: str | None, jpeg_options=None) -> bytes:
    """Encode an RGBA raster for the resolved MIME type.

    Args:
        raster:       (H, W, 4) uint8 RGBA.
        mime_type:    Result of resolve_mime_type(); None selects SVG.
        jpeg_options: Object with quality/progressive/chroma_subsampling,
                      only used for image/jpeg. Defaults apply when None.

    Raises:
        UnsupportedFormatError: For application/pdf, always.
        EncoderError: For any MIME type this encoder does not know.
    """
    if mime_type == MIME_PDF:
        raise UnsupportedFormatError("PDF support has been disabled due to it causing hangs.")
    if mime_type == MIME_PNG:
        return encode_png(raster)
    if mime_type == MIME_JPEG:
        if jpeg_options is None:
            return encode_jpeg(raster)
        return encode_jpeg(
            raster,
            quality=jpeg_options.quality,
            progressive=jpeg_options.progressive,
            chroma_subsampling=jpeg_options.chroma_subsampling,
        )
    if mime_type is None:
        logger.warning(SVG_SIZE_WARNING)
        warnings.warn(SVG_SIZE_WARNING, FormatWarning, stacklevel=2)
        return encode_svg(raster)
    raise EncoderError(f"Unknown MIME type: {mime_type}")


def decode(data: bytes) -> np.ndarray:
    """Decode encoded bytes back to RGBA. Used for lossy round trips."""
    with Image.open(io.BytesIO(data)) as img:
        return np.array(img.convert("RGBA"))
