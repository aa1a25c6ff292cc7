"""
Rotation DTOs

Architectural Intent:
- Data Transfer Objects for the blue-green use case boundary
- Input validation at the application boundary, before any remote call
- Decouples CLI representation from domain value objects
"""

from dataclasses import dataclass
from typing import Optional
from bluegreen.domain.errors import ConfigurationError, NO_MANIFEST_MESSAGE
from bluegreen.domain.value_objects.app_name import AppName


@dataclass(frozen=True)
class BlueGreenPushRequest:
    app_name: str
    manifest_path: Optional[str]
    app_path: Optional[str] = None

    def __post_init__(self) -> None:
        AppName(self.app_name or "")
        if not self.manifest_path:
            raise ConfigurationError(NO_MANIFEST_MESSAGE)
        if not self.app_path:
            object.__setattr__(self, "app_path", None)

    @property
    def app(self) -> AppName:
        return AppName(self.app_name)
