"""Global test configuration.

Provides an in-memory PlatformPort that models application slots, routes
and run state, so rotations can be exercised end to end without a
platform.
"""

from typing import Optional

import pytest

from bluegreen.domain.errors import PlatformError
from bluegreen.domain.ports.platform_port import PlatformPort


class InMemoryPlatform(PlatformPort):
    def __init__(self, *names: str):
        self.apps: dict[str, dict] = {}
        self.calls: list[tuple] = []
        self._failures: dict[tuple, Exception] = {}
        for name in names:
            self.apps[name] = {"state": "started", "routes": {name}, "version": name}

    def fail_on(self, *call: str, error: Optional[Exception] = None) -> None:
        self._failures[call] = error or PlatformError(f"{' '.join(call)} failed")

    def _record(self, *call) -> None:
        self.calls.append(call)
        for key, failure in self._failures.items():
            if call[: len(key)] == key:
                raise failure

    def _require(self, name: str) -> dict:
        if name not in self.apps:
            raise PlatformError(f"App {name} not found")
        return self.apps[name]

    async def exists(self, name: str) -> bool:
        self._record("exists", name)
        return name in self.apps

    async def push(self, name, manifest_path, app_path=None):
        try:
            self._record("push", name, manifest_path, app_path)
        except PlatformError:
            # a push that fails to start still leaves a crashed app behind
            self.apps[name] = {"state": "crashed", "routes": {name}, "version": "broken"}
            raise
        self.apps[name] = {"state": "started", "routes": {name}, "version": "new"}

    async def rename(self, old_name, new_name):
        self._record("rename", old_name, new_name)
        app = self._require(old_name)
        del self.apps[old_name]
        self.apps[new_name] = app

    async def stop(self, name):
        self._record("stop", name)
        self._require(name)["state"] = "stopped"

    async def delete(self, name):
        self._record("delete", name)
        self.apps.pop(name, None)

    async def unmap_route(self, source_app_name, target_host_name):
        self._record("unmap_route", source_app_name, target_host_name)
        self._require(source_app_name)["routes"].discard(target_host_name)

    async def list_applications(self):
        self._record("list_applications")

    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] not in ("exists", "list_applications")]


@pytest.fixture
def platform():
    return InMemoryPlatform("myapp")


@pytest.fixture
def make_platform():
    return InMemoryPlatform
