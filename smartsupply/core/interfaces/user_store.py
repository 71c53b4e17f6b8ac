"""Abstract interface for user account storage."""

from abc import ABC, abstractmethod

from smartsupply.core.entities.user import User


class IUserStore(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Create a user. Raises DuplicateUserEmailError on a taken email."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        pass
