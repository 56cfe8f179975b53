"""Shared pytest fixtures for assetgen tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from assetgen.io.models import AssetKind, InputAsset
from assetgen.platforms.ios.assets import IOS_CONTENTS_JSON, IOS_SPLASH_IMAGE_SET_PATH
from assetgen.project import Project

# Stock Splash.imageset manifest shipped with a fresh Capacitor iOS project.
STOCK_SPLASH_CONTENTS = {
    "images": [
        {"idiom": "universal", "filename": "splash-2732x2732-2.png", "scale": "1x"},
        {"idiom": "universal", "filename": "splash-2732x2732-1.png", "scale": "2x"},
        {"idiom": "universal", "filename": "splash-2732x2732.png", "scale": "3x"},
    ],
    "info": {"version": 1, "author": "xcode"},
}

LOGO_RGBA = (220, 20, 60, 255)

ImageFactory = Callable[..., Path]


@pytest.fixture
def make_image(tmp_path: Path) -> ImageFactory:
    """Return a factory writing a solid-colour PNG and returning its path."""

    def _make(
        name: str = "source.png",
        size: tuple[int, int] = (400, 400),
        color: tuple[int, int, int, int] = LOGO_RGBA,
        directory: Path | None = None,
    ) -> Path:
        target_dir = directory or tmp_path / "sources"
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        Image.new("RGBA", size, color).save(path, format="PNG")
        return path

    return _make


@pytest.fixture
def ios_project(tmp_path: Path) -> Project:
    """Create a project with an ``ios`` platform and the stock splash manifest."""
    imageset = tmp_path / "app" / "ios" / IOS_SPLASH_IMAGE_SET_PATH
    imageset.mkdir(parents=True)
    (imageset / IOS_CONTENTS_JSON).write_text(
        json.dumps(STOCK_SPLASH_CONTENTS, indent=2), encoding="utf-8"
    )
    return Project.load(tmp_path / "app")


@pytest.fixture
def splash_manifest(ios_project: Project) -> Path:
    return ios_project.ios_dir / IOS_SPLASH_IMAGE_SET_PATH / IOS_CONTENTS_JSON


@pytest.fixture
def load_asset(make_image: ImageFactory) -> Callable[..., InputAsset]:
    """Return a factory producing a loaded InputAsset of the given kind."""

    def _load(kind: AssetKind, size: tuple[int, int] = (400, 400), **kwargs) -> InputAsset:
        path = make_image(f"{kind.value}.png", size=size, **kwargs)
        asset = InputAsset(path=path, kind=kind)
        asset.load()
        return asset

    return _load


@pytest.fixture
def logo_rgba() -> tuple[int, int, int, int]:
    """Colour of the images produced by ``make_image`` by default."""
    return LOGO_RGBA


@pytest.fixture
def stock_splash_contents() -> dict:
    """The Splash manifest written by ``ios_project`` before any generation."""
    return json.loads(json.dumps(STOCK_SPLASH_CONTENTS))
