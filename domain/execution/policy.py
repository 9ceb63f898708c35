"""
Auto-advance policy.

Decides from goal mode, measure and elapsed time whether a bout must end on
its own, and when near-end countdown cues are due. The policy only returns
facts; the session runtime turns them into transitions and the notifier turns
them into beeps or vibrations.
"""

from dataclasses import dataclass
from typing import Optional

from domain.models.bout import MeasureType
from domain.models.sequence import GoalMode


def should_advance(
    goal: GoalMode,
    measure: MeasureType,
    target_value: Optional[int],
    elapsed_seconds: int,
) -> bool:
    """
    True when a timed bout in a strict sequence has reached its target.

    Elastic sequences and repetition bouts always advance manually. A missing
    or zero target never advances.
    """
    if goal != GoalMode.STRICT or measure != MeasureType.TIME:
        return False
    if not target_value:
        return False
    return elapsed_seconds >= target_value


def in_cue_window(
    beep_start_seconds: int,
    target_value: Optional[int],
    elapsed_seconds: int,
) -> bool:
    """True when 0 < remaining <= beep_start_seconds."""
    if not target_value:
        return False
    remaining = target_value - elapsed_seconds
    return 0 < remaining <= beep_start_seconds


def is_final_cue(target_value: Optional[int], elapsed_seconds: int) -> bool:
    """True on the exact second the target is reached."""
    if not target_value:
        return False
    return target_value - elapsed_seconds == 0


@dataclass
class CueTracker:
    """
    Remembers the last cued second so each countdown second cues once.

    Ticks run faster than once per second, so the same remaining-second is
    evaluated several times. ``check`` returns the remaining seconds only the
    first time a given second is seen inside the window, and 0 once for the
    final cue.
    """

    beep_start_seconds: int = 3
    last_cued: Optional[int] = None

    def reset(self) -> None:
        self.last_cued = None

    def check(
        self,
        measure: MeasureType,
        target_value: Optional[int],
        elapsed_seconds: int,
    ) -> Optional[int]:
        """
        Return the remaining seconds to cue for, or None when nothing is due.
        """
        if measure != MeasureType.TIME or not target_value:
            return None

        if in_cue_window(self.beep_start_seconds, target_value, elapsed_seconds):
            remaining = target_value - elapsed_seconds
        elif is_final_cue(target_value, elapsed_seconds):
            remaining = 0
        else:
            return None

        if remaining == self.last_cued:
            return None
        self.last_cued = remaining
        return remaining
