"""
Platform Port

Architectural Intent:
- Port interface for the platform-as-a-service hosting the application
- Each operation is independent, may fail on its own, and raises on failure
- Implemented by CloudFoundryAdapter (cf CLI) or test doubles
- Retry policy, if any, belongs to implementations, never to the core
"""

from abc import ABC, abstractmethod
from typing import Optional


class PlatformPort(ABC):
    """
    Port interface for imperative operations on named applications.
    """

    @abstractmethod
    async def exists(self, name: str) -> bool:
        """
        Returns True iff exactly one application with this name exists
        in the currently targeted space.
        """
        pass

    @abstractmethod
    async def push(
        self, name: str, manifest_path: str, app_path: Optional[str] = None
    ) -> None:
        """
        Pushes and starts the application under the given name.
        """
        pass

    @abstractmethod
    async def rename(self, old_name: str, new_name: str) -> None:
        pass

    @abstractmethod
    async def stop(self, name: str) -> None:
        pass

    @abstractmethod
    async def delete(self, name: str) -> None:
        pass

    @abstractmethod
    async def unmap_route(self, source_app_name: str, target_host_name: str) -> None:
        """
        Unmaps the route under target_host_name whose domain is the first
        route bound to source_app_name.
        """
        pass

    @abstractmethod
    async def list_applications(self) -> None:
        """
        Displays the applications in the targeted space.
        """
        pass
