"""Stage sequence for one Tabata workout program.

A program is an immutable tuple of :class:`Stage` values::

    Prepare, Work, Rest, Work, Rest, Work, ..., Work, Finish

The first rest-type stage is called ``Prepare``; later ones are ``Rest``.
"""

from __future__ import annotations

from dataclasses import dataclass


# ── stage names ───────────────────────────────────────────────────────────

PREPARE = "Prepare"
WORK = "Work"
REST = "Rest"
FINISH = "Finish"

REST_STAGE_NAMES = (PREPARE, REST)

# ── defaults ──────────────────────────────────────────────────────────────

DEFAULT_CYCLES = 8
PREPARE_MS = 10_000
WORK_MS = 30_000
REST_MS = 10_000
FINISH_MS = 10_000


@dataclass(frozen=True)
class Stage:
    """A named, timed segment of the workout."""

    name: str
    duration_ms: int

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            raise ValueError(
                f"stage {self.name!r} has negative duration {self.duration_ms}"
            )

    @property
    def is_rest(self) -> bool:
        return self.name in REST_STAGE_NAMES

    @property
    def is_work(self) -> bool:
        return self.name == WORK


def build_stages(
    cycles: int = DEFAULT_CYCLES,
    *,
    prepare_ms: int = PREPARE_MS,
    work_ms: int = WORK_MS,
    rest_ms: int = REST_MS,
    finish_ms: int = FINISH_MS,
) -> tuple[Stage, ...]:
    """Build the ``2 * cycles + 1`` stages of one workout."""
    if cycles < 1:
        raise ValueError(f"cycles must be >= 1, got {cycles}")

    stages: list[Stage] = []
    for cycle in range(cycles):
        if cycle == 0:
            stages.append(Stage(PREPARE, prepare_ms))
        else:
            stages.append(Stage(REST, rest_ms))
        stages.append(Stage(WORK, work_ms))

    stages.append(Stage(FINISH, finish_ms))
    return tuple(stages)


DEFAULT_STAGES: tuple[Stage, ...] = build_stages()
