import logging as lg
from collections import deque
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, Type

import intcode.common.ops as ops
import intcode.runtime.decoder as dec
from intcode.common.hwconf import WORD_MIN, WORD_MAX
from intcode.common.settings import MachineSettings
from intcode.runtime.memory import Memory
from intcode.runtime.operands import Operand
from intcode.runtime.errors import (
    MachineError, MemoryFault, MissingInputError, WordOverflow, ConfigurationError
)


class State(Enum):
    RUNNING = 'running'
    SUSPENDED_ON_OUTPUT = 'suspended-on-output'
    SUSPENDED_ON_MISSING_INPUT = 'suspended-on-missing-input'
    HALTED = 'halted'
    FAULTED = 'faulted'


def check_word(value: int) -> int:
    if value < WORD_MIN or value > WORD_MAX:
        raise WordOverflow(value)

    return value


class Computer:
    pointer: int        # Instruction pointer
    relative_base: int  # Base of relative parameters
    state: State
    steps: int          # Executed instructions
    memory: Memory
    input_queue: deque[int]
    output: deque[int]
    settings: MachineSettings

    def __init__(self, program: Iterable[int], settings: MachineSettings | None = None):
        self.memory = Memory(program)

        self.pointer = 0
        self.relative_base = 0
        self.state = State.RUNNING
        self.steps = 0
        self.started = False
        self.fault: MachineError | None = None

        self.input_queue = deque()
        self.output = deque()

        self.settings = MachineSettings()

        if settings is not None:
            self.configure(settings)

    # - Configuration - #

    def ensure_not_started(self):
        if self.started:
            raise ConfigurationError('Machine cannot be configured once started')

    def configure(self, settings: MachineSettings):
        self.ensure_not_started()
        self.memory.grow(settings.memory_size)

        self.settings = MachineSettings().update(
            memory_size=max(settings.memory_size, len(self.memory)),
            halt_on_output=self.settings.halt_on_output or settings.halt_on_output,
            halt_on_missing_input=self.settings.halt_on_missing_input or settings.halt_on_missing_input,
            verbose=self.settings.verbose or settings.verbose
        )

        return self

    def set_available_memory(self, size: int):
        self.ensure_not_started()
        self.memory.grow(size)
        self.settings.update(memory_size=len(self.memory))
        return self

    def halt_on_output(self):
        self.ensure_not_started()
        self.settings.update(halt_on_output=True)
        return self

    def halt_on_missing_input(self):
        self.ensure_not_started()
        self.settings.update(halt_on_missing_input=True)
        return self

    # - I/O - #

    def input(self, value: int):
        self.input_queue.append(check_word(value))

    def get_next_output(self) -> int | None:
        if not self.output:
            return None

        return self.output.popleft()

    def get_all_output(self) -> Iterator[int]:
        return iter(list(self.output))

    def clear_output(self):
        self.output.clear()

    def get(self, address: int) -> int:
        return self.memory.read(address)

    def set(self, address: int, value: int):
        self.memory.write(address, check_word(value))

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v}' for k, v in {
            'IP': self.pointer,
            'RB': self.relative_base,
            'ST': self.state.value,
            'IN': len(self.input_queue),
            'OUT': len(self.output),
            'STEPS': self.steps
        }.items()]

        lg.debug(' '.join(state))

    def load(self, operand: Operand) -> int:
        return operand.read(self.memory, self.relative_base)

    def store(self, operand: Operand, value: int):
        self.memory.write(operand.address(self.relative_base), check_word(value))

    def arithm_pair(self, instr: dec.BinaryInstruction, op: Callable[[int, int], int]):
        a = self.load(instr.left)
        b = self.load(instr.right)
        self.store(instr.dest, op(a, b))
        self.pointer += 1 + instr.arity()

    def jump_if(self, instr: dec.Jump, condition: bool):
        if condition:
            target = self.load(instr.target)

            if target < 0:
                raise MemoryFault(target)

            self.pointer = target
        else:
            self.pointer += 1 + instr.arity()

    # - Operations - #

    def add(self, instr: dec.Add):
        self.arithm_pair(instr, lambda a, b: a + b)

    def mul(self, instr: dec.Multiply):
        self.arithm_pair(instr, lambda a, b: a * b)

    def lth(self, instr: dec.LessThan):
        self.arithm_pair(instr, lambda a, b: 1 if a < b else 0)

    def eql(self, instr: dec.Equals):
        self.arithm_pair(instr, lambda a, b: 1 if a == b else 0)

    def inp(self, instr: dec.Input):
        if not self.input_queue:
            if self.settings.halt_on_missing_input:
                lg.debug(f'Suspended on missing input at {self.pointer}')
                self.state = State.SUSPENDED_ON_MISSING_INPUT
                return

            raise MissingInputError(self.pointer)

        self.store(instr.dest, self.input_queue.popleft())
        self.pointer += 1 + instr.arity()

    def out(self, instr: dec.Output):
        self.output.append(self.load(instr.source))
        self.pointer += 1 + instr.arity()

        if self.settings.halt_on_output:
            lg.debug(f'Suspended on output at {self.pointer}')
            self.state = State.SUSPENDED_ON_OUTPUT

    def jit(self, instr: dec.JumpIfTrue):
        self.jump_if(instr, self.load(instr.condition) != 0)

    def jif(self, instr: dec.JumpIfFalse):
        self.jump_if(instr, self.load(instr.condition) == 0)

    def arb(self, instr: dec.AdjustRelativeBase):
        self.relative_base += self.load(instr.delta)
        self.pointer += 1 + instr.arity()

    def hlt(self, instr: dec.Halt):
        lg.debug(f'Halted at {self.pointer}')
        self.state = State.HALTED

    HANDLERS: Dict[Type[dec.Instruction], Callable] = {
        dec.Add: add,
        dec.Multiply: mul,
        dec.Input: inp,
        dec.Output: out,
        dec.JumpIfTrue: jit,
        dec.JumpIfFalse: jif,
        dec.LessThan: lth,
        dec.Equals: eql,
        dec.AdjustRelativeBase: arb,
        dec.Halt: hlt
    }

    # -- Implementation -- #

    def exec_next(self):
        instr = dec.decode(self.memory, self.pointer)
        lg.debug(f'{self.pointer}: {instr}')
        handler = self.HANDLERS[type(instr)]
        handler(self, instr)

        if self.state is not State.SUSPENDED_ON_MISSING_INPUT:
            self.steps += 1

    def step(self) -> State:
        if self.state is State.HALTED:
            return self.state

        if self.state is State.FAULTED:
            raise MachineError('Machine has faulted and cannot continue') from self.fault

        self.started = True
        self.state = State.RUNNING

        try:
            self.exec_next()
        except MachineError as e:
            self.state = State.FAULTED
            self.fault = e
            raise

        return self.state

    def execute(self) -> State:
        if self.state is State.HALTED:
            return self.state

        self.step()

        while self.state is State.RUNNING:
            self.step()

        return self.state

    def halted(self) -> bool:
        if self.state is State.HALTED:
            return True

        if self.pointer >= len(self.memory):
            return False

        return self.memory.read(self.pointer) == ops.HLT
