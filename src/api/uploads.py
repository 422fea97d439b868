"""Helpers for multipart record forms."""

from fastapi import HTTPException, UploadFile, status

from src.services.attachments import ImageUpload


def resolve_record_id(record_id: int | None, legacy_id: int | None, label: str) -> int:
    """Pick the record id from the ``id`` field, falling back to ``_id``."""
    if record_id is not None:
        return record_id
    if legacy_id is not None:
        return legacy_id
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{label} not found")


async def read_uploads(*files: UploadFile | None) -> dict[int, ImageUpload]:
    """Read ``image1``..``image6`` form files into uploads keyed by slot number.

    Parts with no filename and no content (an empty file input) count as absent.
    """
    uploads = {}
    for slot, file in enumerate(files, start=1):
        if file is None:
            continue
        content = await file.read()
        if not content and not file.filename:
            continue
        uploads[slot] = ImageUpload(
            content=content,
            content_type=file.content_type or "application/octet-stream",
            filename=file.filename,
        )
    return uploads
