from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from ..db.repository import (
    RepositoryError,
    delete_parallel_image,
    insert_parallel_image,
    update_parallel_badges,
)
from ..models.catalog import BADGE_KEYS, ParallelImage, ParallelRecord
from ..models.config_models import DEFAULT_IMAGE_BUCKET

"""Admin curation: badge editing and front/back image management per parallel.

Backend failures never propagate out of the action functions (save, upload,
delete). They come back as CurationOutcome.error, a message meant to be shown
inline next to the form. Nothing is retried.

Object storage is reached through the ImageStore protocol; the concrete
client belongs to the hosting backend. Callers pass the configured bucket
(ClassifierConfig.image_bucket) to every image action.
"""

logger = logging.getLogger(__name__)

Side = Literal["front", "back"]
SIDES: tuple[Side, ...] = ("front", "back")
DEFAULT_EXT = "jpg"


class ImageStore(Protocol):
    def upload(self, bucket: str, path: str, data: bytes) -> None: ...

    def remove(self, bucket: str, paths: Sequence[str]) -> None: ...


@dataclass(frozen=True)
class CurationRow:
    id: str
    product_id: str
    name: str
    badges: Mapping[str, bool]


@dataclass(frozen=True)
class CurationOutcome:
    message: str | None = None
    error: str | None = None
    storage_path: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ImageIndex:
    """Images of one parallel: total count plus the first front and back record."""
    count: int = 0
    front: ParallelImage | None = None
    back: ParallelImage | None = None
    extra: list[ParallelImage] = field(default_factory=list)

    def for_side(self, side: Side) -> ParallelImage | None:
        return self.front if side == "front" else self.back


# --- badges -----------------------------------------------------------------

def badges_from_parallel(parallel: ParallelRecord | Mapping[str, Any]) -> dict[str, bool]:
    if isinstance(parallel, Mapping):
        return {k: bool(parallel.get(k)) for k in BADGE_KEYS}
    return {k: bool(getattr(parallel, k)) for k in BADGE_KEYS}


def to_curation_row(parallel: ParallelRecord) -> CurationRow:
    return CurationRow(
        id=parallel.id,
        product_id=parallel.product_id,
        name=parallel.name,
        badges=badges_from_parallel(parallel),
    )


def with_badge(row: CurationRow, key: str, value: bool) -> CurationRow:
    if key not in BADGE_KEYS:
        raise KeyError(key)
    return CurationRow(row.id, row.product_id, row.name, {**row.badges, key: value})


def is_dirty(row: CurationRow, initial: Mapping[str, CurationRow]) -> bool:
    before = initial.get(row.id)
    if before is None:
        return True
    return any(bool(before.badges.get(k)) != bool(row.badges.get(k)) for k in BADGE_KEYS)


def changed_rows(rows: Iterable[CurationRow], initial: Mapping[str, CurationRow]) -> list[CurationRow]:
    return [r for r in rows if is_dirty(r, initial)]


def to_parallel_update(row: CurationRow) -> dict[str, bool]:
    return {k: bool(row.badges.get(k)) for k in BADGE_KEYS}


def save_badge_changes(
    cursor: Any, rows: Iterable[CurationRow], initial: Mapping[str, CurationRow]
) -> CurationOutcome:
    changed = changed_rows(rows, initial)
    if not changed:
        return CurationOutcome(message="No badge changes to save.")
    try:
        for r in changed:
            update_parallel_badges(cursor, r.id, to_parallel_update(r))
    except RepositoryError as e:
        logger.error(f"update parallels failed: {e}")
        return CurationOutcome(error=str(e) or "Failed to update parallels.")
    return CurationOutcome(message=f"Saved {len(changed)} parallel badge update(s).")


# --- image paths --------------------------------------------------------------

def file_ext(filename: str) -> str:
    parts = filename.split(".")
    if len(parts) > 1:
        return (parts[-1] or DEFAULT_EXT).lower()
    return DEFAULT_EXT


def build_storage_path(
    product_id: str, parallel_id: str, side: Side, filename: str, unique: str | None = None
) -> str:
    """Bucket key `<productId>/<parallelId>/<side>-<unique>.<ext>`.

    The side is part of the file name so front/back can be recovered from the
    path alone.
    """
    if side not in SIDES:
        raise ValueError(f"invalid side: {side!r}")
    unique = unique or str(uuid.uuid4())
    return f"{product_id}/{parallel_id}/{side}-{unique}.{file_ext(filename)}"


def detect_side_from_path(path: str | None) -> Side | None:
    if not path:
        return None
    p = path.lower()
    if "/front-" in p or "/front/" in p or "front-" in p:
        return "front"
    if "/back-" in p or "/back/" in p or "back-" in p:
        return "back"
    return None


def index_images(images: Iterable[ParallelImage]) -> dict[str, ImageIndex]:
    index: dict[str, ImageIndex] = {}
    for img in images:
        entry = index.setdefault(img.parallel_id, ImageIndex())
        entry.count += 1
        side = detect_side_from_path(img.storage_path)
        if side == "front" and entry.front is None:
            entry.front = img
        elif side == "back" and entry.back is None:
            entry.back = img
        else:
            entry.extra.append(img)
    return index


def short_path(path: str | None, max_len: int = 42) -> str:
    if not path:
        return ""
    if len(path) <= max_len:
        return path
    half = max_len // 2
    return f"{path[:half]}…{path[-half:]}"


# --- image actions ------------------------------------------------------------

def upload_side(
    cursor: Any,
    store: ImageStore,
    row: CurationRow,
    side: Side,
    filename: str | None,
    data: bytes | None,
    unique: str | None = None,
    *,
    bucket: str = DEFAULT_IMAGE_BUCKET,
) -> CurationOutcome:
    """Upload one side to the bucket, then record it in parallel_images."""
    if not filename or data is None:
        return CurationOutcome(error=f"Choose a {side} image first.")
    path = build_storage_path(row.product_id, row.id, side, filename, unique)
    try:
        store.upload(bucket, path, data)
        insert_parallel_image(cursor, row.id, path)
    except Exception as e:
        logger.error(f"upload {side} failed for {row.id}: {e}")
        return CurationOutcome(error=str(e) or f"Failed to upload {side} image.", storage_path=path)
    return CurationOutcome(message=f'Uploaded {side} image for "{row.name}".', storage_path=path)


def delete_side(
    cursor: Any,
    store: ImageStore,
    row: CurationRow,
    side: Side,
    index: Mapping[str, ImageIndex],
    *,
    bucket: str = DEFAULT_IMAGE_BUCKET,
) -> CurationOutcome:
    """Remove one side from the bucket, then delete its parallel_images row."""
    entry = index.get(row.id)
    image = entry.for_side(side) if entry else None
    if image is None or not image.storage_path:
        return CurationOutcome(error=f"No {side} image found to delete.")
    try:
        store.remove(bucket, [image.storage_path])
        delete_parallel_image(cursor, image)
    except Exception as e:
        logger.error(f"delete {side} failed for {row.id}: {e}")
        return CurationOutcome(error=str(e) or f"Failed to delete {side} image.")
    return CurationOutcome(
        message=f'Deleted {side} image for "{row.name}".', storage_path=image.storage_path
    )
