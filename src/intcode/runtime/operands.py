from dataclasses import dataclass

import intcode.common.ops as ops
from intcode.runtime.memory import Memory
from intcode.runtime.errors import MalformedInstruction, UnknownParameterMode


class Operand:
    def read(self, memory: Memory, relative_base: int) -> int:
        raise NotImplementedError()

    def address(self, relative_base: int) -> int:
        raise NotImplementedError()


@dataclass
class Immediate(Operand):
    value: int

    def read(self, memory: Memory, relative_base: int) -> int:
        return self.value

    def address(self, relative_base: int) -> int:
        raise MalformedInstruction(f'Immediate operand {self.value} used as a destination')

    def __str__(self) -> str:
        return f'#{self.value}'


@dataclass
class Position(Operand):
    target: int

    def read(self, memory: Memory, relative_base: int) -> int:
        return memory.read(self.target)

    def address(self, relative_base: int) -> int:
        return self.target

    def __str__(self) -> str:
        return f'[{self.target}]'


@dataclass
class Relative(Operand):
    offset: int

    def read(self, memory: Memory, relative_base: int) -> int:
        return memory.read(self.address(relative_base))

    def address(self, relative_base: int) -> int:
        return relative_base + self.offset

    def __str__(self) -> str:
        return f'[rb{self.offset:+}]'


MODES = {
    ops.POSITION: Position,
    ops.IMMEDIATE: Immediate,
    ops.RELATIVE: Relative
}


def resolve(raw: int, mode: int) -> Operand:
    try:
        kind = MODES[mode]
    except KeyError:
        raise UnknownParameterMode(mode) from None

    return kind(raw)
