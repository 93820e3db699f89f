import pytest

import intcode.runtime.decoder as dec
from intcode.runtime.memory import Memory
from intcode.runtime.operands import Immediate, Position, Relative, resolve
from intcode.runtime.errors import (
    UnknownOpcode, UnknownParameterMode, MalformedInstruction, MemoryFault
)


def test_split_cell():
    assert dec.split_cell(1002) == (2, [0, 1, 0])
    assert dec.split_cell(21107) == (7, [1, 1, 2])
    assert dec.split_cell(99) == (99, [0, 0, 0])


def test_decode_modes():
    instr = dec.decode(Memory([1002, 4, 3, 4, 33]), 0)

    assert instr == dec.Multiply(Position(4), Immediate(3), Position(4))
    assert instr.arity() == 3


def test_decode_relative():
    instr = dec.decode(Memory([109, 1, 204, -1, 99]), 2)

    assert instr == dec.Output(Relative(-1))
    assert str(instr) == 'out [rb-1]'


def test_arity():
    assert dec.Add.arity() == 3
    assert dec.Input.arity() == 1
    assert dec.JumpIfFalse.arity() == 2
    assert dec.AdjustRelativeBase.arity() == 1
    assert dec.Halt.arity() == 0
    assert dec.decode(Memory([99]), 0) == dec.Halt()


def test_unknown_opcode():
    with pytest.raises(UnknownOpcode) as e:
        dec.decode(Memory([42, 0, 0, 0]), 0)

    assert e.value.value == 42

    with pytest.raises(UnknownOpcode):
        dec.decode(Memory([-1]), 0)


def test_unknown_mode():
    with pytest.raises(UnknownParameterMode) as e:
        dec.decode(Memory([301, 0, 0, 0, 99]), 0)

    assert e.value.mode == 3


def test_truncated_instruction():
    with pytest.raises(MemoryFault) as e:
        dec.decode(Memory([1, 0]), 0)

    assert e.value.address == 2


def test_operands():
    memory = Memory([10, 20, 30])

    assert Immediate(7).read(memory, 0) == 7
    assert Position(1).read(memory, 0) == 20
    assert Relative(-1).read(memory, 3) == 30
    assert Relative(-1).address(3) == 2
    assert Position(2).address(100) == 2
    assert resolve(5, 2) == Relative(5)

    with pytest.raises(MalformedInstruction):
        Immediate(1).address(0)
