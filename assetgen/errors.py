"""Exception types raised by the asset generation pipeline."""

from __future__ import annotations

from pathlib import Path


class AssetGenerationError(Exception):
    """Base class for all asset generation failures."""


class ProjectConfigurationError(AssetGenerationError):
    """Raised when the target platform is not configured in the project."""


class PipelineNotReadyError(AssetGenerationError):
    """Raised when an input asset was not probed before generation."""


class TemplateCatalogError(AssetGenerationError):
    """Raised for catalog entries that cannot be rendered."""


class ConfigurationError(AssetGenerationError):
    """Raised for invalid generator options."""


class InputAssetError(AssetGenerationError):
    """Raised when a source image cannot be opened or decoded."""


class ManifestCorruptError(AssetGenerationError):
    """Raised when an image set manifest cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Manifest {path} is unreadable: {reason}")
        self.path = path
        self.reason = reason
