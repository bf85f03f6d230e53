import pytest

from pose_feedback.rep_logic import RepetitionState, update_rep_state


def run(sequence):
    state = RepetitionState()
    for correct in sequence:
        update_rep_state(state, correct)
    return state


@pytest.mark.parametrize("sequence, expected", [
    ([True, True, False, True], 2),
    ([True, True, True], 1),
    ([], 0),
    ([False, False], 0),
    ([True, False, True, False, True], 3),
])
def test_counts_rising_edges(sequence, expected):
    assert run(sequence).correct_count == expected


def test_returns_true_only_on_rising_edge():
    state = RepetitionState()
    assert update_rep_state(state, True) is True
    assert update_rep_state(state, True) is False
    assert update_rep_state(state, False) is False
    assert update_rep_state(state, True) is True


def test_incorrect_frame_clears_completed_flag():
    state = run([True])
    assert state.completed_repetition is True
    update_rep_state(state, False)
    assert state.completed_repetition is False
    assert state.correct_count == 1


def test_reset():
    state = run([True, False, True])
    state.reset()
    assert state == RepetitionState()
