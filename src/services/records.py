"""Project and event services: CRUD with image attachments."""

import logging
from datetime import timedelta
from typing import Any

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.event import Event
from src.models.project import Project
from src.services.attachments import (
    ORPHAN_GRACE_PERIOD,
    AttachmentService,
    ImageSlots,
    ImageUpload,
    SlotChange,
)
from src.services.errors import Conflict, NotFound, StoreFailure

logger = logging.getLogger(__name__)


class RecordService:
    """CRUD for one kind of showcase record.

    Subclasses set ``model``, the scalar ``fields`` editors may set, and the
    human-readable ``label`` used in messages.
    """

    model: Any = None
    fields: tuple[str, ...] = ("name", "description", "location")
    label: str = "Record"

    def __init__(self, db: Session, attachments: AttachmentService):
        self.db = db
        self.attachments = attachments

    def list_all(self) -> list[Any]:
        """Return every record in store order."""
        try:
            return self.db.query(self.model).order_by(self.model.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self.label.lower()}s: {e}")
            raise StoreFailure() from e

    def get(self, record_id: int, missing_status: int | None = None) -> Any:
        """Return one record or raise NotFound (with ``missing_status`` if given)."""
        try:
            record = self.db.query(self.model).filter(self.model.id == record_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load {self.label.lower()} {record_id}: {e}")
            raise StoreFailure() from e
        if not record:
            raise NotFound(f"{self.label} not found", status_code=missing_status)
        return record

    def create(self, values: dict[str, Any], uploads: dict[int, ImageUpload]) -> Any:
        """Create a record with its images.

        Raises:
            Conflict: A record with the same name already exists
        """
        name = values.get("name")
        existing = self.db.query(self.model).filter(self.model.name == name).first()
        if existing:
            raise Conflict(f"Duplicate {self.label} found.")

        change = self.attachments.stage(uploads)
        image_keys, image_urls = change.slots.to_columns()
        record = self.model(
            **{f: values.get(f) for f in self.fields},
            image_keys=image_keys,
            image_urls=image_urls,
        )
        self._save(record, change)
        logger.info(f"Created {self.label.lower()} {record.id} '{record.name}'")
        return record

    def update(
        self,
        record_id: int,
        values: dict[str, Any],
        uploads: dict[int, ImageUpload],
    ) -> Any:
        """Update scalar fields present in ``values`` and replace uploaded slots.

        Raises:
            NotFound: No record with ``record_id`` (reported as 400)
        """
        record = self.get(record_id, missing_status=status.HTTP_400_BAD_REQUEST)

        current = ImageSlots.from_columns(record.image_keys, record.image_urls)
        change = self.attachments.stage(uploads, current=current)

        for f in self.fields:
            if values.get(f) is not None:
                setattr(record, f, values[f])
        record.image_keys, record.image_urls = change.slots.to_columns()

        self._save(record, change)
        self.attachments.commit(change)
        logger.info(
            f"Updated {self.label.lower()} {record.id}, "
            f"replaced {len(change.uploaded)} image(s)"
        )
        return record

    def delete(self, record_id: int) -> None:
        """Delete a record and then every image it references.

        Raises:
            NotFound: No record with ``record_id``
        """
        record = self.get(record_id)
        slots = ImageSlots.from_columns(record.image_keys, record.image_urls)

        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete {self.label.lower()} {record_id}: {e}")
            raise StoreFailure() from e

        orphaned = self.attachments.purge(slots)
        logger.info(
            f"Deleted {self.label.lower()} {record_id} and "
            f"{len(slots.keys()) - len(orphaned)} image(s)"
        )

    def _save(self, record: Any, change: SlotChange) -> None:
        """Commit ``record``; on failure discard the blobs staged for it."""
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save {self.label.lower()}: {e}")
            self.attachments.rollback(change)
            raise StoreFailure() from e
        self.db.refresh(record)


class ProjectService(RecordService):
    """Service for portfolio projects."""

    model = Project
    label = "Project"


class EventService(RecordService):
    """Service for events."""

    model = Event
    fields = ("name", "description", "location", "date", "time")
    label = "Event"


def referenced_image_keys(db: Session) -> set[str]:
    """Return every blob key a project or event currently points at."""
    referenced: set[str] = set()
    try:
        for model in (Project, Event):
            for (keys,) in db.query(model.image_keys).all():
                referenced.update(key for key in keys or [] if key)
    except SQLAlchemyError as e:
        logger.error(f"Failed to collect referenced image keys: {e}")
        raise StoreFailure() from e
    return referenced


def sweep_orphan_images(
    db: Session, attachments: AttachmentService, grace: timedelta = ORPHAN_GRACE_PERIOD
) -> list[str]:
    """Delete generated blobs older than ``grace`` that no record references."""
    return attachments.sweep_orphans(referenced_image_keys(db), grace=grace)
