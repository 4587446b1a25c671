"""Dev seeding helper - a sample document for the stub auth user."""

import asyncio
import uuid

from backend.docreview.db.engine import get_session_factory
from backend.docreview.db.sql_repositories import SqlDocumentRepository

# Use "Bearer 00000000-0000-0000-0000-000000000002" to act as this user
DEV_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
DEV_DOCUMENT_ID = uuid.UUID("00000000-0000-0000-0000-0000000000d1")

DEV_DOCUMENT_CONTENT = (
    "Our team plans to migrate the billing service to the new platform next quarter. "
    "The migration will reduce costs. We have not yet estimated the downtime required. "
    "Customers will be notified when it happens."
)


async def seed_dev_document() -> None:
    """Seed a sample document for local testing.

    This function is idempotent - safe to run multiple times.
    """
    documents = SqlDocumentRepository(get_session_factory())

    existing = await documents.get_document_by_id(DEV_DOCUMENT_ID)

    if existing:
        print(f"Dev document already exists: {existing.title}")
        return

    print(f"Creating dev document with id {DEV_DOCUMENT_ID}...")
    await documents.save_document(
        document_id=DEV_DOCUMENT_ID,
        user_id=DEV_USER_ID,
        title="Billing migration plan",
        content=DEV_DOCUMENT_CONTENT,
        kind="text",
    )
    print("Dev seeding complete")


if __name__ == "__main__":
    asyncio.run(seed_dev_document())
