"""Load the demo catalog into the server database."""

from datetime import datetime
from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..stores.seed import DEMO_CHARACTERS, DEMO_PROFILE
from .database import Character, Profile
from .repositories import BaseRepository


def _naive(value: Optional[datetime]) -> Optional[datetime]:
    return value.replace(tzinfo=None) if value else value


async def seed_catalog(session_maker: async_sessionmaker[AsyncSession]) -> int:
    """Insert missing catalog characters and the demo profile. Returns characters added."""
    added = 0
    async with session_maker() as session:
        characters = BaseRepository(Character, session)
        profiles = BaseRepository(Profile, session)

        for character in DEMO_CHARACTERS:
            if await characters.exists(character.id):
                continue
            await characters.create(
                id=character.id,
                owner_id=character.created_by,
                name=character.name,
                description=character.description,
                personality=character.personality,
                avatar_url=character.avatar_url,
                is_active=character.is_public,
                created_at=_naive(character.created_at),
                updated_at=_naive(character.updated_at),
            )
            added += 1

        if not await profiles.exists(DEMO_PROFILE.user_id):
            await profiles.create(
                user_id=DEMO_PROFILE.user_id,
                email=DEMO_PROFILE.email,
                full_name=DEMO_PROFILE.full_name,
                created_at=_naive(DEMO_PROFILE.created_at),
            )

        await session.commit()

    logger.info(f"Seeded {added} characters")
    return added
