#!/usr/bin/env python3
"""Delete image blobs that no project or event references.

Blob and record writes are not atomic, so a crash between them can leave
unreferenced objects in the bucket. Run this periodically (e.g. from cron).
Blobs newer than ORPHAN_SWEEP_GRACE_MINUTES are left alone.

Usage:
    S3_BUCKET=my-bucket S3_REGION=us-east-1 python scripts/sweep_orphan_blobs.py
"""

import logging
import os
import sys
from datetime import timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config import get_settings
from src.database import SessionLocal
from src.services.attachments import AttachmentService
from src.services.records import sweep_orphan_images
from src.services.storage import create_blob_store


def main() -> int:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    settings = get_settings()
    if not settings.s3_bucket:
        print("S3_BUCKET is not set")
        return 1

    blob_store = create_blob_store(settings)
    db = SessionLocal()
    try:
        deleted = sweep_orphan_images(
            db,
            AttachmentService(blob_store),
            grace=timedelta(minutes=settings.orphan_sweep_grace_minutes),
        )
    finally:
        db.close()
        blob_store.close()

    for key in deleted:
        print(key)
    print(f"Deleted {len(deleted)} orphaned blob(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
