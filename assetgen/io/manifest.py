"""Read, merge and atomically rewrite asset catalog ``Contents.json`` files."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Any, Dict

from ..errors import ManifestCorruptError
from .models import OutputAsset

logger = logging.getLogger(__name__)

ManifestEntry = Dict[str, Any]

DARK_APPEARANCE = {"appearance": "luminosity", "value": "dark"}

_locks_guard = Lock()
_locks: dict[Path, Lock] = {}


def manifest_lock(path: Path) -> Lock:
    """Return the process-wide lock serialising updates to *path*."""
    key = Path(path).resolve()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = Lock()
        return lock


def read_manifest(path: Path) -> dict[str, Any]:
    """Parse the manifest at *path*, raising ManifestCorruptError on any failure."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestCorruptError(path, str(exc)) from exc
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ManifestCorruptError(path, f"invalid JSON ({exc})") from exc
    if not isinstance(document, dict):
        raise ManifestCorruptError(path, "top level is not an object")
    images = document.get("images", [])
    if not isinstance(images, list):
        raise ManifestCorruptError(path, "'images' is not a list")
    for image in images:
        if not isinstance(image, dict) or not image.get("filename"):
            continue
        appearances = image.get("appearances")
        if appearances is not None and not isinstance(appearances, list):
            raise ManifestCorruptError(
                path, f"appearances of {image['filename']} is not a list"
            )
    document["images"] = images
    return document


def write_manifest(path: Path, document: dict[str, Any]) -> None:
    """Write *document* next to *path* and atomically move it into place."""
    payload = json.dumps(document, indent=2) + "\n"
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def dark_entry(output: OutputAsset) -> ManifestEntry:
    template = output.template
    scale = template.scale if template.scale is not None else 1
    return {
        "appearances": [dict(DARK_APPEARANCE)],
        "idiom": "universal",
        "scale": f"{scale}x",
        "filename": template.name,
    }


def entry_key(entry: ManifestEntry) -> tuple[Any, ...]:
    """Identity of an entry: idiom, scale and the set of appearances."""
    appearances = entry.get("appearances") or []
    tags = sorted(
        (str(item.get("appearance")), str(item.get("value")))
        for item in appearances
        if isinstance(item, dict)
    )
    return (entry.get("idiom"), entry.get("scale"), tuple(tags))


def merge_dark_entry(document: dict[str, Any], entry: ManifestEntry) -> dict[str, Any]:
    """Return a copy of *document* with *entry* merged into its images.

    Entries without a filename are dropped. An existing entry with the same
    idiom, scale and appearances is replaced in place; otherwise *entry* is
    appended.
    """
    kept: list[ManifestEntry] = []
    dropped = 0
    for image in document.get("images", []):
        if isinstance(image, dict) and image.get("filename"):
            kept.append(image)
        else:
            dropped += 1
    if dropped:
        logger.warning("Dropped %d manifest entries without a filename", dropped)

    key = entry_key(entry)
    for index, image in enumerate(kept):
        if entry_key(image) == key:
            kept[index] = entry
            break
    else:
        kept.append(entry)

    merged = dict(document)
    merged["images"] = kept
    return merged


def register_dark_variant(output: OutputAsset, manifest_path: Path) -> None:
    """Record *output* as the dark-appearance image in the manifest at *manifest_path*."""
    entry = dark_entry(output)
    with manifest_lock(manifest_path):
        document = read_manifest(manifest_path)
        write_manifest(manifest_path, merge_dark_entry(document, entry))
    logger.info("Registered dark variant %s in %s", entry["filename"], manifest_path)
