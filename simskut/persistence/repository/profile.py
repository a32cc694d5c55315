"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from simskut.domain.error import ProfileAlreadyExistsError
from simskut.domain.model import Profile
from simskut.domain.repository import ProfileRepository
from simskut.domain.value import PublicProfile, UserId
from simskut.persistence.mappers import profile_to_dict, row_to_profile
from simskut.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find a profile by its user id."""
        stmt = select(profiles_table).where(profiles_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_username(self, username: str) -> Optional[Profile]:
        """Find a profile by exact username."""
        stmt = select(profiles_table).where(profiles_table.c.username == username)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_usernames(self, usernames: list[str]) -> list[Profile]:
        """Resolve several usernames in one query."""
        if not usernames:
            return []
        stmt = select(profiles_table).where(profiles_table.c.username.in_(usernames))
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def search_by_username_prefix(self, prefix: str, limit: int) -> list[Profile]:
        """Case-insensitive prefix search ordered by username."""
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        stmt = (
            select(profiles_table)
            .where(profiles_table.c.username.ilike(f"{escaped}%", escape="\\"))
            .order_by(profiles_table.c.username)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def find_public_profiles(
        self, user_ids: list[UserId]
    ) -> dict[UserId, PublicProfile]:
        """Load public fields for several users."""
        if not user_ids:
            return {}
        stmt = select(
            profiles_table.c.id,
            profiles_table.c.username,
            profiles_table.c.display_name,
            profiles_table.c.avatar_url,
        ).where(profiles_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return {
            UserId(row["id"]): PublicProfile(
                username=row["username"],
                display_name=row["display_name"],
                avatar_url=row["avatar_url"],
            )
            for row in result.mappings().all()
        }

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile.

        The insert runs in a savepoint so a conflict leaves the request
        transaction usable for the caller's re-fetch.

        Raises:
            ProfileAlreadyExistsError: If the id or username is taken
        """
        stmt = insert(profiles_table).values(**profile_to_dict(profile))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ProfileAlreadyExistsError(
                f"Profile already exists: {profile.id} / {profile.username}"
            ) from e
        return profile

    async def save(self, profile: Profile) -> Profile:
        """Replace an existing profile record.

        Raises:
            ProfileAlreadyExistsError: If the new username is taken
        """
        values = profile_to_dict(profile)
        values.pop("id")
        values.pop("created_at")
        stmt = (
            update(profiles_table)
            .where(profiles_table.c.id == profile.id)
            .values(**values)
        )
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ProfileAlreadyExistsError(
                f"Username already taken: {profile.username}"
            ) from e
        return profile

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[Profile]:
        """List profiles, newest first."""
        stmt = (
            select(profiles_table)
            .order_by(profiles_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def count(self) -> int:
        """Count all profiles."""
        stmt = select(func.count()).select_from(profiles_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0
