from dataclasses import dataclass
from typing import ClassVar, Dict, List, Tuple, Type

import intcode.common.ops as ops
from intcode.common.hwconf import MODE_BASE, OPCODE_BASE, MAX_PARAMS
from intcode.runtime.memory import Memory
from intcode.runtime.operands import Operand, resolve
from intcode.runtime.errors import UnknownOpcode


class Instruction:
    OPCODE: ClassVar[int]

    @classmethod
    def arity(cls) -> int:
        return ops.ARITY[cls.OPCODE]

    def operands(self) -> Tuple[Operand, ...]:
        raise NotImplementedError()

    def __str__(self) -> str:
        args = ' '.join(str(o) for o in self.operands())
        return f'{ops.NAMES[self.OPCODE]} {args}'.rstrip()


@dataclass
class BinaryInstruction(Instruction):
    left: Operand
    right: Operand
    dest: Operand

    def operands(self):
        return (self.left, self.right, self.dest)


@dataclass
class Add(BinaryInstruction):
    OPCODE = ops.ADD


@dataclass
class Multiply(BinaryInstruction):
    OPCODE = ops.MUL


@dataclass
class LessThan(BinaryInstruction):
    OPCODE = ops.LTH


@dataclass
class Equals(BinaryInstruction):
    OPCODE = ops.EQL


@dataclass
class Input(Instruction):
    OPCODE = ops.INP
    dest: Operand

    def operands(self):
        return (self.dest,)


@dataclass
class Output(Instruction):
    OPCODE = ops.OUT
    source: Operand

    def operands(self):
        return (self.source,)


@dataclass
class Jump(Instruction):
    condition: Operand
    target: Operand

    def operands(self):
        return (self.condition, self.target)


@dataclass
class JumpIfTrue(Jump):
    OPCODE = ops.JIT


@dataclass
class JumpIfFalse(Jump):
    OPCODE = ops.JIF


@dataclass
class AdjustRelativeBase(Instruction):
    OPCODE = ops.ARB
    delta: Operand

    def operands(self):
        return (self.delta,)


@dataclass
class Halt(Instruction):
    OPCODE = ops.HLT

    def operands(self):
        return ()


INSTRUCTIONS: Dict[int, Type[Instruction]] = {
    cls.OPCODE: cls for cls in [
        Add, Multiply, Input, Output, JumpIfTrue, JumpIfFalse,
        LessThan, Equals, AdjustRelativeBase, Halt
    ]
}


def split_cell(cell: int) -> Tuple[int, List[int]]:
    ''' Splits an instruction cell into the opcode and the parameter modes '''

    if cell < 0:
        raise UnknownOpcode(cell)

    opcode = cell % OPCODE_BASE
    param = cell // OPCODE_BASE
    modes = []

    for _ in range(MAX_PARAMS):
        modes.append(param % MODE_BASE)
        param //= MODE_BASE

    return opcode, modes


def decode(memory: Memory, pointer: int) -> Instruction:
    cell = memory.read(pointer)
    opcode, modes = split_cell(cell)

    try:
        kind = INSTRUCTIONS[opcode]
    except KeyError:
        raise UnknownOpcode(opcode) from None

    operands = [
        resolve(memory.read(pointer + 1 + i), modes[i])
        for i in range(kind.arity())
    ]

    return kind(*operands)
