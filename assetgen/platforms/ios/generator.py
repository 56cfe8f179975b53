"""Generate iOS app icons and launch splashes from input assets."""

from __future__ import annotations

import logging
import math
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Sequence, TypeVar

from ...errors import PipelineNotReadyError, ProjectConfigurationError, TemplateCatalogError
from ...generator import AssetGenerator, AssetGeneratorOptions
from ...io import manifest
from ...io.models import AssetKind, InputAsset, OutputAsset, OutputAssetTemplate, TemplateGroup
from ...project import Project
from ...transform.pipeline import ImagePipeline
from .assets import (
    ICON_FAMILY_GROUPS,
    IOS_2X_UNIVERSAL_ANYANY_SPLASH,
    IOS_2X_UNIVERSAL_ANYANY_SPLASH_DARK,
    IOS_APP_ICON_SET_PATH,
    IOS_CONTENTS_JSON,
    IOS_SPLASH_IMAGE_SET_PATH,
    templates_for,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
Handler = Callable[[InputAsset, Project], list[OutputAsset]]


def logo_target_width(source_width: int, scale: float) -> int:
    """Width of the logo drawn on a splash canvas."""
    return math.floor(source_width * scale)


class IosAssetGenerator(AssetGenerator):
    """Asset generator for the ``App/Assets.xcassets`` catalog of an iOS project."""

    def __init__(self, options: AssetGeneratorOptions | None = None) -> None:
        super().__init__(options)
        self._handlers: Dict[AssetKind, Handler] = {
            AssetKind.LOGO: self._generate_from_logo,
            AssetKind.LOGO_DARK: self._generate_from_logo,
            AssetKind.ICON: partial(self._generate_icons, groups=(TemplateGroup.ICON,)),
            AssetKind.NOTIFICATION_ICON: partial(
                self._generate_icons, groups=(TemplateGroup.NOTIFICATION,)
            ),
            AssetKind.SETTINGS_ICON: partial(
                self._generate_icons, groups=(TemplateGroup.SETTINGS,)
            ),
            AssetKind.SPOTLIGHT_ICON: partial(
                self._generate_icons, groups=(TemplateGroup.SPOTLIGHT,)
            ),
            AssetKind.SPLASH: self._generate_splash,
            AssetKind.SPLASH_DARK: self._generate_splash,
        }

    def handler_for(self, kind: AssetKind) -> Handler | None:
        return self._handlers.get(kind)

    def generate(self, asset: InputAsset, project: Project) -> list[OutputAsset]:
        """Produce the iOS variants for *asset*.

        Kinds without a handler produce nothing. Raises
        ProjectConfigurationError when the project has no iOS platform and
        PipelineNotReadyError when *asset* was not loaded first.
        """
        ios_dir(project)
        handler = self.handler_for(asset.kind)
        if handler is None:
            logger.debug("No iOS outputs for %s input %s", asset.kind.value, asset.path)
            return []
        outputs = handler(asset, project)
        logger.info(
            "Generated %d iOS assets from %s (%s)", len(outputs), asset.path, asset.kind.value
        )
        return outputs

    def register_dark_variant(self, output: OutputAsset, project: Project) -> None:
        """Register *output* as the dark splash in the Splash image set manifest."""
        manifest.register_dark_variant(output, splash_manifest_path(project))

    def _generate_from_logo(self, asset: InputAsset, project: Project) -> list[OutputAsset]:
        pipe = _require_pipeline(asset)
        if asset.width <= 0:
            raise PipelineNotReadyError(f"Width of {asset.path} has not been probed")

        icons = templates_for(*ICON_FAMILY_GROUPS)
        _check_templates(icons)
        splashes = [IOS_2X_UNIVERSAL_ANYANY_SPLASH_DARK]
        if asset.kind == AssetKind.LOGO:
            splashes.insert(0, IOS_2X_UNIVERSAL_ANYANY_SPLASH)
        _check_templates(splashes)

        target_width = logo_target_width(asset.width, self.options.logo_splash_scale)
        logo = pipe.resize(target_width)
        logger.debug("Logo scaled to %dpx for splash composition", target_width)

        tasks: list[Callable[[], OutputAsset]] = [
            partial(self._write_icon, asset, project, pipe, icon) for icon in icons
        ]
        for splash in splashes:
            compose = partial(self._compose_splash, asset, project, logo, splash)
            if splash.appearance == "dark":
                tasks.append(partial(self._then_register, compose, project))
            else:
                tasks.append(compose)
        return self._run_all(tasks)

    def _generate_icons(
        self,
        asset: InputAsset,
        project: Project,
        groups: Sequence[TemplateGroup],
    ) -> list[OutputAsset]:
        pipe = _require_pipeline(asset)
        icons = templates_for(*groups)
        _check_templates(icons)
        return self._run_all(
            [partial(self._write_icon, asset, project, pipe, icon) for icon in icons]
        )

    def _generate_splash(self, asset: InputAsset, project: Project) -> list[OutputAsset]:
        pipe = _require_pipeline(asset)
        template = (
            IOS_2X_UNIVERSAL_ANYANY_SPLASH
            if asset.kind == AssetKind.SPLASH
            else IOS_2X_UNIVERSAL_ANYANY_SPLASH_DARK
        )
        _check_templates([template])
        dest = _output_dir(project, IOS_SPLASH_IMAGE_SET_PATH) / template.name
        info = pipe.resize(template.width, template.height).encode(template.format).to_file(dest)
        generated = OutputAsset(
            template, asset, project, {template.name: dest}, {template.name: info}
        )
        if asset.kind == AssetKind.SPLASH_DARK:
            self.register_dark_variant(generated, project)
        return [generated]

    def _write_icon(
        self,
        asset: InputAsset,
        project: Project,
        pipe: ImagePipeline,
        icon: OutputAssetTemplate,
    ) -> OutputAsset:
        dest = _output_dir(project, IOS_APP_ICON_SET_PATH) / icon.name
        info = pipe.resize(icon.width, icon.height).encode(icon.format).to_file(dest)
        return OutputAsset(icon, asset, project, {icon.name: dest}, {icon.name: info})

    def _compose_splash(
        self,
        asset: InputAsset,
        project: Project,
        logo: ImagePipeline,
        splash: OutputAssetTemplate,
    ) -> OutputAsset:
        background = (
            self.options.dark_background
            if splash.appearance == "dark"
            else self.options.light_background
        )
        canvas = ImagePipeline.create(
            width=splash.width, height=splash.height, channels=4, background=background
        )
        dest = _output_dir(project, IOS_SPLASH_IMAGE_SET_PATH) / splash.name
        info = canvas.composite(logo, gravity="center").encode(splash.format).to_file(dest)
        return OutputAsset(splash, asset, project, {splash.name: dest}, {splash.name: info})

    def _then_register(
        self, produce: Callable[[], OutputAsset], project: Project
    ) -> OutputAsset:
        output = produce()
        self.register_dark_variant(output, project)
        return output

    def _run_all(self, tasks: Sequence[Callable[[], T]]) -> list[T]:
        """Run *tasks* concurrently and return their results in task order.

        The first failure cancels tasks that have not started and is re-raised.
        """
        if not tasks:
            return []
        with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
            futures = [executor.submit(task) for task in tasks]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    for other in pending:
                        other.cancel()
                    raise future.exception()  # type: ignore[misc]
            return [future.result() for future in futures]


def ios_dir(project: Project) -> Path:
    path = project.ios_dir
    if not path:
        raise ProjectConfigurationError("No ios project found")
    return Path(path)


def splash_manifest_path(project: Project) -> Path:
    return ios_dir(project) / IOS_SPLASH_IMAGE_SET_PATH / IOS_CONTENTS_JSON


def _output_dir(project: Project, relative: str) -> Path:
    directory = ios_dir(project) / relative
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _require_pipeline(asset: InputAsset) -> ImagePipeline:
    pipe = asset.pipeline()
    if pipe is None:
        raise PipelineNotReadyError(f"Input asset {asset.path} has not been loaded")
    return pipe


def _check_templates(templates: Sequence[OutputAssetTemplate]) -> None:
    for template in templates:
        if (template.width or 0) <= 0 or (template.height or 0) <= 0:
            raise TemplateCatalogError(
                f"Template {template.name} is missing a width or height"
            )
