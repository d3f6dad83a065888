# database.py
import logging
from fastapi import HTTPException, Request
from motor.motor_asyncio import AsyncIOMotorClient

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "courses", "notes", "classrooms")


class Database:
    """Collection handles shared by every request.

    Starts unbound; handlers only see it once `connect` (or `bind`) has run.
    """

    def __init__(self):
        self.client = None
        self.users = None
        self.courses = None
        self.notes = None
        self.classrooms = None

    @property
    def ready(self) -> bool:
        return all(getattr(self, name) is not None for name in COLLECTIONS)

    def bind(self, db) -> None:
        for name in COLLECTIONS:
            setattr(self, name, db[name])
        logger.info(f"Collections initialized: {', '.join(COLLECTIONS)}")

    async def connect(self, settings) -> None:
        # tz_aware so reads come back as UTC-aware datetimes, matching what was written
        self.client = AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
        await self.client.admin.command("ping")
        logger.info("MongoDB connected.")
        self.bind(self.client[settings.db_name])
        await self.ensure_indexes()

    async def ensure_indexes(self) -> None:
        await self.users.create_index("clerkId", unique=True)
        await self.classrooms.create_index("classCode", unique=True)
        await self.notes.create_index("createdAt")

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None


def get_db(request: Request) -> Database:
    db = request.app.state.db
    if not db.ready:
        raise HTTPException(status_code=503, detail="Database not initialized. Please wait.")
    return db
