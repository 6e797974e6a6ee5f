"""Driver that touches no storage; every read returns a blank entity."""

from chatstore.entities import User


class MockupDriver:
    """Stand-in driver for tests of code built on top of Queries."""

    async def get_user_by_id(self, id: str) -> User:
        return User.blank()

    async def get_user_by_username(self, username: str) -> User:
        return User.blank()

    async def get_users(self, user_ids: list[str]) -> list[User]:
        return []
