"""Output templates for the iOS asset catalog."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Tuple

from ...io.models import AssetKind, OutputAssetTemplate, TemplateGroup

IOS_APP_ICON_SET_NAME = "AppIcon"
IOS_APP_ICON_SET_PATH = f"App/Assets.xcassets/{IOS_APP_ICON_SET_NAME}.appiconset"
IOS_SPLASH_IMAGE_SET_NAME = "Splash"
IOS_SPLASH_IMAGE_SET_PATH = f"App/Assets.xcassets/{IOS_SPLASH_IMAGE_SET_NAME}.imageset"
IOS_CONTENTS_JSON = "Contents.json"


def _icon(
    kind: AssetKind,
    group: TemplateGroup,
    name: str,
    px: int,
    scale: int,
    idiom: str,
) -> OutputAssetTemplate:
    return OutputAssetTemplate(
        kind=kind, group=group, name=name, width=px, height=px, scale=scale, idiom=idiom
    )


_NOTIFICATION = (AssetKind.NOTIFICATION_ICON, TemplateGroup.NOTIFICATION)
_SETTINGS = (AssetKind.SETTINGS_ICON, TemplateGroup.SETTINGS)
_SPOTLIGHT = (AssetKind.SPOTLIGHT_ICON, TemplateGroup.SPOTLIGHT)
_APP = (AssetKind.ICON, TemplateGroup.ICON)

IOS_1X_IPAD_NOTIFICATION_ICON = _icon(*_NOTIFICATION, "AppIcon-20x20@1x.png", 20, 1, "ipad")
IOS_2X_IPHONE_NOTIFICATION_ICON = _icon(*_NOTIFICATION, "AppIcon-20x20@2x.png", 40, 2, "iphone")
IOS_2X_IPAD_NOTIFICATION_ICON = _icon(*_NOTIFICATION, "AppIcon-20x20@2x-1.png", 40, 2, "ipad")
IOS_3X_IPHONE_NOTIFICATION_ICON = _icon(*_NOTIFICATION, "AppIcon-20x20@3x.png", 60, 3, "iphone")

IOS_1X_IPAD_SETTINGS_ICON = _icon(*_SETTINGS, "AppIcon-29x29@1x.png", 29, 1, "ipad")
IOS_2X_IPHONE_SETTINGS_ICON = _icon(*_SETTINGS, "AppIcon-29x29@2x.png", 58, 2, "iphone")
IOS_2X_IPAD_SETTINGS_ICON = _icon(*_SETTINGS, "AppIcon-29x29@2x-1.png", 58, 2, "ipad")
IOS_3X_IPHONE_SETTINGS_ICON = _icon(*_SETTINGS, "AppIcon-29x29@3x.png", 87, 3, "iphone")

IOS_1X_IPAD_SPOTLIGHT_ICON = _icon(*_SPOTLIGHT, "AppIcon-40x40@1x.png", 40, 1, "ipad")
IOS_2X_IPHONE_SPOTLIGHT_ICON = _icon(*_SPOTLIGHT, "AppIcon-40x40@2x.png", 80, 2, "iphone")
IOS_2X_IPAD_SPOTLIGHT_ICON = _icon(*_SPOTLIGHT, "AppIcon-40x40@2x-1.png", 80, 2, "ipad")
IOS_3X_IPHONE_SPOTLIGHT_ICON = _icon(*_SPOTLIGHT, "AppIcon-40x40@3x.png", 120, 3, "iphone")

IOS_2X_IPHONE_APP_ICON = _icon(*_APP, "AppIcon-60x60@2x.png", 120, 2, "iphone")
IOS_3X_IPHONE_APP_ICON = _icon(*_APP, "AppIcon-60x60@3x.png", 180, 3, "iphone")
IOS_1X_IPAD_APP_ICON = _icon(*_APP, "AppIcon-76x76@1x.png", 76, 1, "ipad")
IOS_2X_IPAD_APP_ICON = _icon(*_APP, "AppIcon-76x76@2x.png", 152, 2, "ipad")
IOS_2X_IPAD_PRO_APP_ICON = _icon(*_APP, "AppIcon-83.5x83.5@2x.png", 167, 2, "ipad")
IOS_1X_MARKETING_APP_ICON = _icon(*_APP, "AppIcon-512@2x.png", 1024, 1, "ios-marketing")

IOS_2X_UNIVERSAL_ANYANY_SPLASH = OutputAssetTemplate(
    kind=AssetKind.SPLASH,
    group=TemplateGroup.SPLASH_LIGHT,
    name="Default@2x~universal~anyany.png",
    width=2732,
    height=2732,
    scale=2,
    idiom="universal",
)
IOS_2X_UNIVERSAL_ANYANY_SPLASH_DARK = OutputAssetTemplate(
    kind=AssetKind.SPLASH_DARK,
    group=TemplateGroup.SPLASH_DARK,
    name="Default@2x~universal~anyany-dark.png",
    width=2732,
    height=2732,
    scale=2,
    idiom="universal",
    appearance="dark",
)

IOS_TEMPLATES: Tuple[OutputAssetTemplate, ...] = (
    IOS_1X_IPAD_NOTIFICATION_ICON,
    IOS_2X_IPHONE_NOTIFICATION_ICON,
    IOS_2X_IPAD_NOTIFICATION_ICON,
    IOS_3X_IPHONE_NOTIFICATION_ICON,
    IOS_1X_IPAD_SETTINGS_ICON,
    IOS_2X_IPHONE_SETTINGS_ICON,
    IOS_2X_IPAD_SETTINGS_ICON,
    IOS_3X_IPHONE_SETTINGS_ICON,
    IOS_1X_IPAD_SPOTLIGHT_ICON,
    IOS_2X_IPHONE_SPOTLIGHT_ICON,
    IOS_2X_IPAD_SPOTLIGHT_ICON,
    IOS_3X_IPHONE_SPOTLIGHT_ICON,
    IOS_2X_IPHONE_APP_ICON,
    IOS_3X_IPHONE_APP_ICON,
    IOS_1X_IPAD_APP_ICON,
    IOS_2X_IPAD_APP_ICON,
    IOS_2X_IPAD_PRO_APP_ICON,
    IOS_1X_MARKETING_APP_ICON,
    IOS_2X_UNIVERSAL_ANYANY_SPLASH,
    IOS_2X_UNIVERSAL_ANYANY_SPLASH_DARK,
)

ICON_FAMILY_GROUPS: Tuple[TemplateGroup, ...] = (
    TemplateGroup.ICON,
    TemplateGroup.NOTIFICATION,
    TemplateGroup.SETTINGS,
    TemplateGroup.SPOTLIGHT,
)


def build_groups(
    templates: Iterable[OutputAssetTemplate],
) -> Dict[TemplateGroup, Tuple[OutputAssetTemplate, ...]]:
    """Index *templates* by group, keeping catalog order within each group."""
    buckets: Dict[TemplateGroup, list[OutputAssetTemplate]] = defaultdict(list)
    for template in templates:
        buckets[template.group].append(template)
    return {group: tuple(buckets.get(group, ())) for group in TemplateGroup}


IOS_TEMPLATE_GROUPS = build_groups(IOS_TEMPLATES)


def templates_for(*groups: TemplateGroup) -> list[OutputAssetTemplate]:
    """Return the catalog templates of *groups*, in the order given."""
    selected: list[OutputAssetTemplate] = []
    for group in groups:
        selected.extend(IOS_TEMPLATE_GROUPS[group])
    return selected
