"""
App Name Value Object

Architectural Intent:
- Owns the managed slot naming contract shared by planner and adapters
- Previous slot is <name>-g1, two-back slot is <name>-g2
- Other tooling inspecting platform state relies on these suffixes
"""

from dataclasses import dataclass
from bluegreen.domain.errors import ConfigurationError

PREVIOUS_SUFFIX = "-g1"
TWO_BACK_SUFFIX = "-g2"
MANAGED_SUFFIXES = (PREVIOUS_SUFFIX, TWO_BACK_SUFFIX)


def previous_slot_name(name: str) -> str:
    return f"{name}{PREVIOUS_SUFFIX}"


def two_back_slot_name(name: str) -> str:
    return f"{name}{TWO_BACK_SUFFIX}"


def is_managed_slot(name: str) -> bool:
    return name.endswith(MANAGED_SUFFIXES)


@dataclass(frozen=True)
class AppName:
    """
    Value Object representing the base name of a blue-green application.
    """
    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ConfigurationError("Application name cannot be empty")
        if is_managed_slot(self.value):
            raise ConfigurationError(
                f"'{self.value}' is a managed slot name; "
                "push using the base application name"
            )

    @property
    def live(self) -> str:
        return self.value

    @property
    def previous(self) -> str:
        return previous_slot_name(self.value)

    @property
    def two_back(self) -> str:
        return two_back_slot_name(self.value)

    def __str__(self) -> str:
        return self.value
