"""
Objection and skill libraries
Usage counters are read-modify-write; concurrent increments can lose updates
"""
import logging
from typing import Iterable, List, Optional, Type, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.library import ObjectionLibraryEntry, SkillLibraryEntry

logger = logging.getLogger(__name__)

LibraryEntry = Union[ObjectionLibraryEntry, SkillLibraryEntry]


class LibraryService:
    """Service for library entries and their usage counters"""

    async def list_entries(
        self,
        db: AsyncSession,
        model: Type[LibraryEntry],
        category: Optional[str] = None,
    ) -> List[LibraryEntry]:
        """Most used first"""
        query = select(model).order_by(model.usage_count.desc(), model.id)
        if category:
            query = query.where(model.category == category)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_entry(self, db: AsyncSession, model: Type[LibraryEntry], entry_id: int) -> Optional[LibraryEntry]:
        result = await db.execute(select(model).where(model.id == entry_id))
        return result.scalar_one_or_none()

    async def increment_usage(self, db: AsyncSession, entry: LibraryEntry) -> LibraryEntry:
        entry.usage_count = (entry.usage_count or 0) + 1
        await db.flush()
        logger.info(f"{entry.__tablename__} entry {entry.id} used ({entry.usage_count} total)")
        return entry

    async def increment_many(self, db: AsyncSession, model: Type[LibraryEntry], ids: Iterable[int]) -> int:
        """Bump every existing id once; unknown ids are skipped"""
        bumped = 0
        for entry_id in dict.fromkeys(ids):
            entry = await self.get_entry(db, model, entry_id)
            if entry is None:
                logger.warning(f"{model.__tablename__} entry {entry_id} not found, skipping usage bump")
                continue
            await self.increment_usage(db, entry)
            bumped += 1
        return bumped

    async def add_objection(self, db: AsyncSession, text: str, category: str = "custom") -> ObjectionLibraryEntry:
        """New objection, counted as used once"""
        entry = ObjectionLibraryEntry(objection_text=text.strip(), category=category, usage_count=1)
        db.add(entry)
        await db.flush()
        logger.info(f"Added objection {entry.id} to the library")
        return entry

    async def add_skill(self, db: AsyncSession, text: str, category: str) -> SkillLibraryEntry:
        entry = SkillLibraryEntry(skill_text=text.strip(), category=category, usage_count=0)
        db.add(entry)
        await db.flush()
        logger.info(f"Added skill {entry.id} ({category}) to the library")
        return entry


library_service = LibraryService()
