"""Pillow-backed image transforms used to derive every output variant."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageColor, ImageOps, UnidentifiedImageError

try:  # pragma: no cover - optional dependency
    import cairosvg  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    cairosvg = None  # type: ignore[assignment]

from ..errors import InputAssetError

logger = logging.getLogger(__name__)

_CHANNEL_MODES = {3: "RGB", 4: "RGBA"}
_FORMATS = {"png": "PNG", "jpeg": "JPEG", "jpg": "JPEG", "webp": "WEBP"}
# Horizontal and vertical placement fractions of the free space.
_GRAVITY: dict[str, tuple[float, float]] = {
    "center": (0.5, 0.5),
    "north": (0.5, 0.0),
    "south": (0.5, 1.0),
    "east": (1.0, 0.5),
    "west": (0.0, 0.5),
}


@dataclass(frozen=True, slots=True)
class OutputInfo:
    """Metadata about an encoded file written to disk."""

    format: str
    size: int
    width: int
    height: int
    channels: int


class ImagePipeline:
    """Immutable handle around a decoded image.

    Every transform returns a new pipeline so one decoded source can be shared
    across threads while sibling variants are derived from it.
    """

    def __init__(self, image: Image.Image, output_format: str = "png") -> None:
        self._image = image
        self._format = output_format

    @classmethod
    def open(cls, path: Path) -> "ImagePipeline":
        """Decode *path* into an RGBA pipeline, rasterizing SVG when possible."""
        data = Path(path).read_bytes()
        if not data:
            raise InputAssetError(f"Image file is empty: {path}")
        if _looks_like_svg(data):
            if cairosvg is None:
                raise InputAssetError(
                    f"SVG input requires the optional cairosvg package: {path}"
                )
            data = cairosvg.svg2png(bytestring=data)  # type: ignore[attr-defined]
        try:
            with Image.open(BytesIO(data)) as img:
                img.load()
                return cls(img.convert("RGBA"))
        except (UnidentifiedImageError, OSError) as exc:
            raise InputAssetError(f"Unable to decode image {path}: {exc}") from exc

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        channels: int = 4,
        background: str = "#ffffff",
    ) -> "ImagePipeline":
        """Return a blank canvas filled with *background*."""
        mode = _CHANNEL_MODES.get(channels)
        if mode is None:
            raise ValueError(f"Unsupported channel count: {channels}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        color = ImageColor.getcolor(background, mode)
        return cls(Image.new(mode, (width, height), color))

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def output_format(self) -> str:
        return self._format

    def resize(self, width: int, height: int | None = None) -> "ImagePipeline":
        """Resize to *width* x *height*.

        With both dimensions the image is scaled to cover the box and centre-cropped;
        a missing height keeps the aspect ratio.
        """
        if width <= 0:
            logger.debug("Zero-width resize requested; producing an empty image")
            return ImagePipeline(Image.new(self._image.mode, (0, 0)), self._format)
        if height is None:
            height = max(1, round(self._image.height * width / self._image.width))
            resized = self._image.resize((width, height), Image.Resampling.LANCZOS)
            return ImagePipeline(resized, self._format)
        resized = ImageOps.fit(self._image, (width, height), Image.Resampling.LANCZOS)
        return ImagePipeline(resized, self._format)

    def composite(
        self,
        overlays: "ImagePipeline | Sequence[ImagePipeline]",
        gravity: str = "center",
    ) -> "ImagePipeline":
        """Alpha-composite *overlays* over this image, anchored by *gravity*."""
        if isinstance(overlays, ImagePipeline):
            overlays = [overlays]
        try:
            fx, fy = _GRAVITY[gravity]
        except KeyError:
            raise ValueError(f"Unsupported gravity: {gravity}") from None

        base = self._image.convert("RGBA")
        for overlay in overlays:
            top = overlay.image
            if top.width == 0 or top.height == 0:
                continue
            offset = (
                math.floor((base.width - top.width) * fx),
                math.floor((base.height - top.height) * fy),
            )
            layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
            layer.paste(top.convert("RGBA"), offset)
            base = Image.alpha_composite(base, layer)
        if base.mode != self._image.mode:
            base = base.convert(self._image.mode)
        return ImagePipeline(base, self._format)

    def encode(self, output_format: str) -> "ImagePipeline":
        fmt = output_format.lower()
        if fmt not in _FORMATS:
            raise ValueError(f"Unsupported output format: {output_format}")
        return ImagePipeline(self._image, fmt)

    def png(self) -> "ImagePipeline":
        return self.encode("png")

    def to_file(self, path: Path) -> OutputInfo:
        """Encode and write the image to *path*, returning what was written."""
        path = Path(path)
        image = self._image
        pil_format = _FORMATS[self._format]
        if pil_format == "JPEG" and image.mode != "RGB":
            image = image.convert("RGB")
        image.save(path, format=pil_format)
        info = OutputInfo(
            format=self._format,
            size=path.stat().st_size,
            width=image.width,
            height=image.height,
            channels=len(image.getbands()),
        )
        logger.debug("Wrote %s (%dx%d, %d bytes)", path, info.width, info.height, info.size)
        return info


def _looks_like_svg(image_bytes: bytes) -> bool:
    snippet = image_bytes[:1024].lstrip().lower()
    return snippet.startswith(b"<svg") or (
        snippet.startswith(b"<?xml") and b"<svg" in snippet
    )
