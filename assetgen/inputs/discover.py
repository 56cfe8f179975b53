"""Locate and probe the source images of a project."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from ..errors import InputAssetError
from ..io.models import AssetKind, InputAsset

logger = logging.getLogger(__name__)

DEFAULT_ASSETS_DIR = "assets"
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".svg")

# File stems recognised for each kind, in lookup order.
_KIND_STEMS: dict[AssetKind, tuple[str, ...]] = {
    AssetKind.LOGO: ("logo",),
    AssetKind.LOGO_DARK: ("logo-dark",),
    AssetKind.ICON: ("icon", "icon-only"),
    AssetKind.ICON_FOREGROUND: ("icon-foreground",),
    AssetKind.ICON_BACKGROUND: ("icon-background",),
    AssetKind.NOTIFICATION_ICON: ("notification-icon",),
    AssetKind.SETTINGS_ICON: ("settings-icon",),
    AssetKind.SPOTLIGHT_ICON: ("spotlight-icon",),
    AssetKind.SPLASH: ("splash",),
    AssetKind.SPLASH_DARK: ("splash-dark",),
}


def probe_image(path: Path) -> dict[str, Any]:
    """Return width, height, format and alpha information for a raster image."""
    try:
        with Image.open(path) as image:
            image.load()
            width, height = image.size
            return {
                "width": width,
                "height": height,
                "format": image.format,
                "has_alpha": "A" in image.getbands() or "transparency" in image.info,
            }
    except (UnidentifiedImageError, DecompressionBombError, OSError) as exc:
        raise InputAssetError(f"Unable to probe image {path}: {exc}") from exc


def find_input(assets_dir: Path, kind: AssetKind) -> Path | None:
    """Return the first file in *assets_dir* matching a known stem for *kind*."""
    for stem in _KIND_STEMS.get(kind, ()):
        for ext in IMAGE_EXTENSIONS:
            candidate = assets_dir / f"{stem}{ext}"
            if candidate.is_file():
                return candidate
    return None


def discover_inputs(assets_dir: str | Path, load: bool = True) -> list[InputAsset]:
    """Return the input assets found in *assets_dir*, ordered by kind.

    When *load* is true every asset is decoded so generators can use it
    straight away; otherwise raster inputs only have their size probed.
    """
    root = Path(assets_dir)
    if not root.is_dir():
        logger.warning("Assets directory %s does not exist", root)
        return []

    found: list[InputAsset] = []
    for kind in _KIND_STEMS:
        path = find_input(root, kind)
        if path is None:
            continue
        asset = InputAsset(path=path, kind=kind)
        if load:
            asset.load()
            logger.debug("Loaded %s (%dx%d) as %s", path, asset.width, asset.height, kind.value)
        elif path.suffix.lower() != ".svg":
            info = probe_image(path)
            asset.width, asset.height = info["width"], info["height"]
        found.append(asset)
    return found
