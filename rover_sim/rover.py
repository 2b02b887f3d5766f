from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

from .commands import execute, is_command
from .state import RoverState
from .world import Plateau

if TYPE_CHECKING:
    from telemetry.logger import TelemetryLogger


@dataclass
class NavigationReport:
    """Outcome of one command string.

    Attributes
    ----------
    state : RoverState
        Final rover state.
    executed : int
        Recognized commands that were applied.
    ignored : list[str]
        Characters outside the command alphabet, in input order.
    skipped : int
        Characters left unprocessed because the rover had halted.
    """

    state: RoverState
    executed: int = 0
    ignored: List[str] = field(default_factory=list)
    skipped: int = 0

    @property
    def halted(self) -> bool:
        return self.state.error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.to_dict(),
            "result": self.state.format(),
            "executed": self.executed,
            "ignored": list(self.ignored),
            "skipped": self.skipped,
            "halted": self.halted,
        }


class Rover:
    """Grid rover driven by ``M``/``L``/``R`` command strings.

    The rover owns its current state for the lifetime of the instance; a halt
    caused by an obstacle persists across later ``navigate`` calls. Instances
    are not safe to drive from several threads at once, while the plateau is
    read-only and may be shared.
    """

    def __init__(
        self,
        plateau: Optional[Plateau] = None,
        state: Optional[RoverState] = None,
        telemetry: Optional["TelemetryLogger"] = None,
    ) -> None:
        self.plateau = plateau if plateau is not None else Plateau()
        self.state = state if state is not None else RoverState.STARTING_STATE
        self.telemetry = telemetry
        self._step_count = 0

        if not self.plateau.grid.contains(self.state.position):
            raise ValueError(
                f"Starting position {self.state.position.format()} lies outside the "
                f"{self.plateau.grid.width}x{self.plateau.grid.height} grid"
            )
        if self.plateau.is_blocked(self.state.position):
            raise ValueError(f"Starting position {self.state.position.format()} is an obstacle")

    # ------------------------------------------------------------------
    # Command processing
    # ------------------------------------------------------------------
    def step(self, character: str) -> RoverState:
        """Process a single command character and return the new state.

        A halted rover ignores every command.
        """
        if self.state.error:
            return self.state
        self.state = execute(character, self.state, self.plateau)
        self._step_count += 1
        if self.telemetry is not None:
            self.telemetry.log_step(
                {
                    "step": self._step_count,
                    "command": character,
                    "recognized": is_command(character),
                    "state": self.state.to_dict(),
                }
            )
        return self.state

    def run(
        self,
        commands: Optional[str],
        on_step: Optional[Callable[[int, RoverState], None]] = None,
    ) -> NavigationReport:
        """Process a command string and report what happened.

        ``on_step`` is called with the 1-based index and the new state after
        every processed character.
        """
        commands = commands or ""
        report = NavigationReport(state=self.state)
        for index, character in enumerate(commands):
            if self.state.error:
                report.skipped = len(commands) - index
                break
            state = self.step(character)
            if is_command(character):
                report.executed += 1
            else:
                report.ignored.append(character)
            if on_step is not None:
                on_step(index + 1, state)
        report.state = self.state
        return report

    def navigate(self, commands: Optional[str]) -> str:
        """Process a command string and return the formatted final state."""
        return self.run(commands).state.format()

    def get_state(self) -> RoverState:
        return self.state
