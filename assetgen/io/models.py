"""Data models shared across the asset generation pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Mapping

from ..transform.pipeline import ImagePipeline, OutputInfo

if TYPE_CHECKING:  # pragma: no cover
    from ..project import Project


class AssetKind(str, enum.Enum):
    """Role of a source image or of a produced variant."""

    LOGO = "logo"
    LOGO_DARK = "logo-dark"
    ICON = "icon"
    ICON_FOREGROUND = "icon-foreground"
    ICON_BACKGROUND = "icon-background"
    NOTIFICATION_ICON = "notification-icon"
    SETTINGS_ICON = "settings-icon"
    SPOTLIGHT_ICON = "spotlight-icon"
    SPLASH = "splash"
    SPLASH_DARK = "splash-dark"


class TemplateGroup(str, enum.Enum):
    """Named family a catalog template belongs to."""

    ICON = "icon"
    NOTIFICATION = "notification"
    SETTINGS = "settings"
    SPOTLIGHT = "spotlight"
    SPLASH_LIGHT = "splash-light"
    SPLASH_DARK = "splash-dark"


@dataclass(frozen=True, slots=True)
class OutputAssetTemplate:
    """Catalog record describing the shape and name of one output variant."""

    kind: AssetKind
    group: TemplateGroup
    name: str
    width: int | None
    height: int | None
    scale: int | None = None
    idiom: str | None = None
    appearance: str | None = None
    format: str = "png"


@dataclass(slots=True)
class InputAsset:
    """A source image and its lazily decoded pipeline."""

    path: Path
    kind: AssetKind
    width: int = 0
    height: int = 0
    _pipeline: ImagePipeline | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def load(self) -> ImagePipeline:
        """Decode the file once, record its size and return the bound pipeline."""
        if self._pipeline is None:
            self._pipeline = ImagePipeline.open(self.path)
            self.width = self._pipeline.width
            self.height = self._pipeline.height
        return self._pipeline

    def pipeline(self) -> ImagePipeline | None:
        return self._pipeline


@dataclass(frozen=True, slots=True)
class OutputAsset:
    """One generated file plus the template and source it came from."""

    template: OutputAssetTemplate
    asset: InputAsset
    project: "Project"
    destinations: Mapping[str, Path]
    output_info: Mapping[str, OutputInfo]

    def __post_init__(self) -> None:
        if set(self.destinations) != set(self.output_info):
            raise ValueError(
                "Every destination of an output asset needs matching output info"
            )

    def paths(self) -> list[Path]:
        return list(self.destinations.values())


@dataclass(slots=True)
class GenerationSummary:
    """High-level summary of one generation run."""

    project: str
    inputs: int
    outputs: int
    bytes_written: int
    per_kind: Dict[str, int] = field(default_factory=dict)
