# pose_feedback/rep_logic.py

from dataclasses import dataclass


@dataclass
class RepetitionState:
    completed_repetition: bool = False
    correct_count: int = 0

    def reset(self) -> None:
        self.completed_repetition = False
        self.correct_count = 0


# -------------------------------------------------------------
# Main update function
# -------------------------------------------------------------

def update_rep_state(state: RepetitionState, correct: bool) -> bool:
    """
    Edge-triggered rep counting on the per-frame correctness signal.

    - correct, not yet counted  -> count it, mark completed
    - incorrect                 -> clear completed (next correct frame is a new rep)
    - correct, already counted  -> nothing

    There is no debounce window: one incorrect frame between two correct
    ones is enough to count a second rep.

    Returns True when this frame completed a new repetition.
    """
    if correct and not state.completed_repetition:
        state.correct_count += 1
        state.completed_repetition = True
        return True
    if not correct:
        state.completed_repetition = False
    return False
