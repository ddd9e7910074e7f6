from solarops.core.constants import CHITOOR_PROJECT_STAGES, PROJECT_STAGES
from solarops.services import stages


def test_stage_index_ignores_case_and_whitespace():
    assert stages.stage_index(PROJECT_STAGES, "  final payment done ") == len(PROJECT_STAGES) - 1
    assert stages.stage_index(PROJECT_STAGES, "Nowhere") == -1
    assert stages.stage_index(PROJECT_STAGES, None) == -1


def test_next_and_previous_move_one_step():
    assert stages.next_stage(PROJECT_STAGES, PROJECT_STAGES[0]) == PROJECT_STAGES[1]
    assert stages.previous_stage(PROJECT_STAGES, PROJECT_STAGES[5]) == PROJECT_STAGES[4]


def test_moves_are_bounded_at_both_ends():
    assert stages.previous_stage(PROJECT_STAGES, PROJECT_STAGES[0]) is None
    assert stages.next_stage(PROJECT_STAGES, PROJECT_STAGES[-1]) is None
    assert not stages.can_regress(PROJECT_STAGES, PROJECT_STAGES[0])
    assert not stages.can_advance(PROJECT_STAGES, PROJECT_STAGES[-1])


def test_unknown_stage_cannot_move_either_way():
    assert stages.next_stage(PROJECT_STAGES, "Legacy stage") is None
    assert stages.previous_stage(PROJECT_STAGES, "Legacy stage") is None


def test_progress_counts_current_stage_as_done():
    assert stages.stage_progress(PROJECT_STAGES, PROJECT_STAGES[-1]) == 100
    assert round(stages.stage_progress(PROJECT_STAGES, PROJECT_STAGES[0]), 2) == round(100 / 13, 2)
    assert stages.stage_progress(PROJECT_STAGES, "unknown") == 0


def test_chitoor_statuses_use_the_same_rules():
    assert stages.next_stage(CHITOOR_PROJECT_STAGES, "pending") == "In Progress"
    assert stages.next_stage(CHITOOR_PROJECT_STAGES, "On Hold") is None
