from dataclasses import dataclass


@dataclass(frozen=True)
class SlotState:
    """
    Value Object capturing which managed slots existed when probed.
    Probed once per run and never refreshed during execution.
    """
    live_exists: bool
    previous_exists: bool = False
    two_back_exists: bool = False

    @property
    def is_fresh_deploy(self) -> bool:
        return not self.live_exists

    def __str__(self) -> str:
        def mark(flag: bool) -> str:
            return "present" if flag else "absent"

        return (
            f"live={mark(self.live_exists)}, "
            f"previous={mark(self.previous_exists)}, "
            f"two-back={mark(self.two_back_exists)}"
        )
