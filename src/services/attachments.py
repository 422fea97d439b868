"""Six-slot image attachments for projects and events."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from src.models.mixins import SLOT_COUNT
from src.services.errors import StoreFailure
from src.services.storage import BlobStore, generate_key, is_generated_key

logger = logging.getLogger(__name__)

# Staged blobs younger than this may still be waiting on their record commit
ORPHAN_GRACE_PERIOD = timedelta(hours=1)


@dataclass(frozen=True)
class ImageRef:
    """A stored image: its blob key and the public URL derived from it."""

    key: str
    url: str


@dataclass
class ImageUpload:
    """An uploaded file destined for one slot."""

    content: bytes
    content_type: str = "application/octet-stream"
    filename: str | None = None


class ImageSlots:
    """Fixed-length ordered list of optional image references.

    Indexed 0..5; slot numbers on the wire (``image1``..``image6``) are 1-based.
    """

    def __init__(self, refs: list[ImageRef | None] | None = None):
        refs = list(refs) if refs else []
        if len(refs) > SLOT_COUNT:
            raise ValueError(f"At most {SLOT_COUNT} image slots are supported")
        self._refs: list[ImageRef | None] = refs + [None] * (SLOT_COUNT - len(refs))

    @classmethod
    def from_columns(cls, keys: list | None, urls: list | None) -> "ImageSlots":
        """Build slots from the stored key and URL arrays."""
        keys = list(keys or [])[:SLOT_COUNT]
        urls = list(urls or [])[:SLOT_COUNT]
        urls += [None] * (len(keys) - len(urls))
        refs = [ImageRef(key, url) if key else None for key, url in zip(keys, urls)]
        return cls(refs)

    def to_columns(self) -> tuple[list[str | None], list[str | None]]:
        """Return the (image_keys, image_urls) arrays to persist."""
        keys = [ref.key if ref else None for ref in self._refs]
        urls = [ref.url if ref else None for ref in self._refs]
        return keys, urls

    def keys(self) -> list[str]:
        """Return the non-empty keys in slot order."""
        return [ref.key for ref in self._refs if ref]

    def __getitem__(self, index: int) -> ImageRef | None:
        return self._refs[index]

    def __setitem__(self, index: int, ref: ImageRef | None) -> None:
        self._refs[index] = ref

    def __len__(self) -> int:
        return SLOT_COUNT

    def __iter__(self):
        return iter(self._refs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageSlots):
            return NotImplemented
        return self._refs == other._refs

    def __repr__(self) -> str:
        return f"ImageSlots({self._refs!r})"


@dataclass
class SlotChange:
    """Result of staging uploads: the new slots plus keys to clean up later."""

    slots: ImageSlots
    uploaded: list[str] = field(default_factory=list)
    replaced: list[str] = field(default_factory=list)


class AttachmentService:
    """Upload, replace and delete record images in the blob store.

    Mutations happen in two phases around the record write: ``stage`` uploads
    new blobs before the record is saved, then ``commit`` deletes the blobs
    that were replaced, or ``rollback`` discards the new ones if the save
    failed. Blob and record writes are not atomic; keys that cannot be deleted
    are logged as orphans and left for ``sweep_orphans``.
    """

    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    def stage(
        self,
        uploads: dict[int, ImageUpload],
        current: ImageSlots | None = None,
    ) -> SlotChange:
        """Upload new files and compute the resulting slots.

        Args:
            uploads: Files keyed by 1-based slot number
            current: Existing slots for an update, ``None`` for a create

        Raises:
            StoreFailure: An upload failed; blobs uploaded so far were discarded
        """
        invalid = [slot for slot in uploads if not 1 <= slot <= SLOT_COUNT]
        if invalid:
            raise ValueError(f"Invalid image slot(s): {invalid}")

        slots = ImageSlots(list(current)) if current is not None else ImageSlots()
        change = SlotChange(slots=slots)

        for slot in range(1, SLOT_COUNT + 1):
            upload = uploads.get(slot)
            if upload is None:
                continue

            key = generate_key()
            try:
                self.blob_store.put(key, upload.content, upload.content_type)
            except StoreFailure:
                logger.error(f"Upload for image slot {slot} failed")
                self.discard(change.uploaded)
                raise
            change.uploaded.append(key)

            previous = slots[slot - 1]
            if previous is not None:
                change.replaced.append(previous.key)
            slots[slot - 1] = ImageRef(key=key, url=self.blob_store.url_for(key))

        return change

    def commit(self, change: SlotChange) -> list[str]:
        """Delete blobs replaced by a saved change. Returns keys left orphaned."""
        return self.discard(change.replaced)

    def rollback(self, change: SlotChange) -> list[str]:
        """Delete blobs uploaded for a change that was never saved."""
        return self.discard(change.uploaded)

    def purge(self, slots: ImageSlots) -> list[str]:
        """Delete every image in ``slots``. Returns keys left orphaned."""
        return self.discard(slots.keys())

    def discard(self, keys: list[str]) -> list[str]:
        """Best-effort delete of ``keys``; one failure does not stop the rest."""
        orphaned = []
        for key in keys:
            try:
                self.blob_store.delete(key)
            except Exception as e:
                logger.warning(f"Orphaned image blob {key}: delete failed: {e}")
                orphaned.append(key)
        return orphaned

    def sweep_orphans(
        self,
        referenced: set[str],
        grace: timedelta = ORPHAN_GRACE_PERIOD,
        now: datetime | None = None,
    ) -> list[str]:
        """Delete generated blobs that are not in ``referenced``.

        Only keys in the ``generate_key`` format last written more than ``grace``
        ago are candidates, so blobs staged for an uncommitted record survive.
        Returns the keys actually deleted.
        """
        cutoff = (now or datetime.now(UTC)) - grace
        unreferenced = [
            obj.key
            for obj in self.blob_store.list_objects()
            if is_generated_key(obj.key)
            and obj.key not in referenced
            and obj.last_modified < cutoff
        ]
        orphaned = set(self.discard(unreferenced))
        deleted = [key for key in unreferenced if key not in orphaned]
        logger.info(f"Orphan sweep deleted {len(deleted)} blob(s), {len(orphaned)} failed")
        return deleted
