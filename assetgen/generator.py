"""Generator contract and options shared by platform asset generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from PIL import ImageColor

from .errors import ConfigurationError
from .io.models import InputAsset, OutputAsset
from .project import Project

DEFAULT_LOGO_SPLASH_SCALE = 0.2
DEFAULT_SPLASH_BACKGROUND = "#ffffff"
DEFAULT_SPLASH_BACKGROUND_DARK = "#111111"


@dataclass(slots=True)
class AssetGeneratorOptions:
    """User-tunable knobs for splash composition and batch parallelism.

    ``None`` colours fall back to the light/dark defaults independently.
    """

    logo_splash_scale: float = DEFAULT_LOGO_SPLASH_SCALE
    splash_background_color: str | None = None
    splash_background_color_dark: str | None = None
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.logo_splash_scale < 0:
            raise ConfigurationError(
                f"logo_splash_scale must be >= 0, got {self.logo_splash_scale}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")
        for name in ("splash_background_color", "splash_background_color_dark"):
            value = getattr(self, name)
            if value is None:
                continue
            try:
                ImageColor.getrgb(value)
            except ValueError as exc:
                raise ConfigurationError(f"Invalid {name}: {value!r}") from exc

    @property
    def light_background(self) -> str:
        return self.splash_background_color or DEFAULT_SPLASH_BACKGROUND

    @property
    def dark_background(self) -> str:
        return self.splash_background_color_dark or DEFAULT_SPLASH_BACKGROUND_DARK


class AssetGenerator(ABC):
    """Turns one input asset into the output assets a platform requires."""

    def __init__(self, options: AssetGeneratorOptions | None = None) -> None:
        self.options = options or AssetGeneratorOptions()

    @abstractmethod
    def generate(self, asset: InputAsset, project: Project) -> list[OutputAsset]:
        """Produce every output variant derived from *asset* for *project*."""
