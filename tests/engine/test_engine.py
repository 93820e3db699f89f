import pytest

import intcode.runtime.cpu as cpu
from intcode.runtime.errors import (
    MachineError, MemoryFault, MissingInputError, MalformedInstruction, WordOverflow
)

import unit_utils
from fixtures import quine, compare_to_eight  # noqa: F401


def test_single_steps():
    computer = cpu.Computer([1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50])

    assert computer.step() is cpu.State.RUNNING
    assert computer.pointer == 4
    assert computer.memory.snapshot() == [1, 9, 10, 70, 2, 3, 11, 0, 99, 30, 40, 50]

    assert computer.step() is cpu.State.RUNNING
    assert computer.get(0) == 3500

    snapshot = computer.memory.snapshot()
    assert computer.step() is cpu.State.HALTED
    assert computer.memory.snapshot() == snapshot
    assert computer.pointer == 8


def test_halted_is_final():
    computer = cpu.Computer([1002, 4, 3, 4, 33])
    computer.step()

    assert computer.get(4) == 99
    assert computer.execute() is cpu.State.HALTED
    assert computer.halted()
    assert computer.get(computer.pointer) == 99

    steps = computer.steps
    assert computer.step() is cpu.State.HALTED
    assert computer.execute() is cpu.State.HALTED
    assert computer.steps == steps


def test_quine(quine):  # noqa: F811
    computer = unit_utils.execute_with_inputs(quine, memory=128)
    assert list(computer.get_all_output()) == quine


def test_large_multiply():
    computer = unit_utils.execute_with_inputs([1102, 34915192, 34915192, 7, 4, 7, 99, 0])
    outputs = list(computer.get_all_output())

    assert len(outputs) == 1
    assert len(str(outputs[0])) == 16


def test_large_literal():
    computer = unit_utils.execute_with_inputs([104, 1125899906842624, 99])
    assert computer.get_next_output() == 1125899906842624
    assert computer.get_next_output() is None


@pytest.mark.parametrize('value, expected', [(7, 999), (8, 1000), (9, 1001)])
def test_compare_to_eight(compare_to_eight, value, expected):  # noqa: F811
    computer = unit_utils.execute_with_inputs(compare_to_eight, value)
    assert list(computer.get_all_output()) == [expected]


@pytest.mark.parametrize('value, expected', [(0, 0), (3, 1)])
def test_jumps(value, expected):
    program = [3, 12, 6, 12, 15, 1, 13, 14, 13, 4, 13, 99, -1, 0, 1, 9]
    computer = unit_utils.execute_with_inputs(program, value)
    assert list(computer.get_all_output()) == [expected]


def test_relative_base():
    computer = unit_utils.execute_with_inputs([109, 5, 21101, 3, 4, 0, 204, 0, 99], memory=10)

    assert computer.relative_base == 5
    assert computer.get(5) == 7
    assert list(computer.get_all_output()) == [7]


def test_output_queue():
    computer = unit_utils.execute_with_inputs([104, 1, 104, 2, 104, 3, 99])

    assert list(computer.get_all_output()) == [1, 2, 3]
    assert computer.get_next_output() == 1
    assert list(computer.get_all_output()) == [2, 3]

    computer.clear_output()
    assert computer.get_next_output() is None


def test_set_memory():
    computer = cpu.Computer([1, 0, 0, 0, 99])
    computer.set(1, 4)
    computer.set(2, 4)
    computer.execute()

    assert computer.get(0) == 198


def test_missing_input():
    computer = cpu.Computer([3, 0, 99])

    with pytest.raises(MissingInputError) as e:
        computer.execute()

    assert e.value.pointer == 0
    assert computer.state is cpu.State.FAULTED
    assert not computer.halted()


def test_faulted_machine_stays_faulted():
    computer = cpu.Computer([1, 100, 0, 0, 99])

    with pytest.raises(MemoryFault) as e:
        computer.step()

    assert e.value.address == 100

    with pytest.raises(MachineError):
        computer.step()


def test_negative_relative_address():
    with pytest.raises(MemoryFault) as e:
        cpu.Computer([204, -1, 99]).execute()

    assert e.value.address == -1


def test_immediate_destination():
    with pytest.raises(MalformedInstruction):
        cpu.Computer([11101, 1, 1, 0, 99]).execute()


def test_overflow():
    with pytest.raises(WordOverflow):
        cpu.Computer([1102, 4611686018427387904, 2, 0, 99]).execute()

    with pytest.raises(WordOverflow):
        cpu.Computer([3, 0, 99]).input(1 << 63)


def test_debug_dump(caplog):
    computer = cpu.Computer([104, 1, 99])
    computer.execute()

    with caplog.at_level('DEBUG'):
        computer.debug_dump()

    assert 'IP:2' in caplog.text
    assert 'ST:halted' in caplog.text


def test_halted_follows_current_cell():
    computer = cpu.Computer([99])

    assert computer.state is cpu.State.RUNNING
    assert computer.halted()
    assert computer.execute() is cpu.State.HALTED

    computer = cpu.Computer([104, 7, 99]).halt_on_output()
    assert not computer.halted()

    assert computer.execute() is cpu.State.SUSPENDED_ON_OUTPUT
    assert computer.get(computer.pointer) == 99
    assert computer.halted()
    assert computer.get_next_output() == 7


def test_negative_jump_target():
    computer = cpu.Computer([1105, 1, -3, 99])

    with pytest.raises(MemoryFault) as e:
        computer.execute()

    assert e.value.address == -3
    assert computer.state is cpu.State.FAULTED
