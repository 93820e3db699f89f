# type: ignore
import pytest

import unit_utils


@pytest.fixture
def quine():
    yield unit_utils.load_test_program('quine')


@pytest.fixture
def compare_to_eight():
    yield unit_utils.load_test_program('compare8')


@pytest.fixture
def feedback_programs():
    yield [
        (unit_utils.load_test_program('feedback1'), [9, 8, 7, 6, 5], 139629729),
        (unit_utils.load_test_program('feedback2'), [9, 7, 8, 5, 6], 18216)
    ]
