''' Host side drivers composing one or more machines '''

import logging as lg
from itertools import permutations
from typing import Callable, Iterable, List, Sequence, Tuple

from intcode.common.settings import MachineSettings
from intcode.runtime.cpu import Computer, State
from intcode.runtime.errors import MachineError


Runner = Callable[[Sequence[int], Sequence[int], int], int]


class PipelineError(Exception):
    def __init__(self, stage: int, cause: Exception | None = None, message: str | None = None):
        if message is None:
            message = f'Stage {stage} failed: {cause}'

        super().__init__(message)
        self.stage = stage
        self.cause = cause


def run_batch(
    program: Sequence[int],
    inputs: Iterable[int] = (),
    settings: MachineSettings | None = None
) -> List[int]:
    computer = Computer(program, settings)

    for value in inputs:
        computer.input(value)

    state = computer.execute()

    if state is not State.HALTED:
        raise MachineError(f'Batch run stopped in state {state.value}')

    return list(computer.get_all_output())


def run_chain(program: Sequence[int], phases: Sequence[int], signal: int = 0) -> int:
    for stage, phase in enumerate(phases):
        try:
            outputs = run_batch(program, [phase, signal])
        except MachineError as e:
            lg.info(f'Amplifier chain failed at stage {stage}: {e}')
            raise PipelineError(stage, e) from e

        if not outputs:
            raise PipelineError(stage, message=f'Stage {stage} produced no output')

        signal = outputs[0]
        lg.debug(f'Stage {stage} phase {phase} -> {signal}')

    return signal


def run_feedback_loop(
    program: Sequence[int],
    phases: Sequence[int],
    signal: int = 0,
    max_steps: int | None = None
) -> int:
    settings = MachineSettings().update(halt_on_output=True, halt_on_missing_input=True)
    machines = [Computer(program, settings) for _ in phases]

    for machine, phase in zip(machines, phases):
        machine.input(phase)

    last: int | None = None
    pending: int | None = signal
    resumes = 0
    stage = 0

    while not all(m.halted() for m in machines):
        machine = machines[stage]

        if not machine.halted():
            if max_steps is not None and resumes >= max_steps:
                raise PipelineError(stage, message=f'Feedback loop exceeded {max_steps} resumptions')

            if pending is not None:
                machine.input(pending)
                pending = None

            try:
                state = machine.execute()
            except MachineError as e:
                lg.info(f'Feedback loop failed at stage {stage}: {e}')
                raise PipelineError(stage, e) from e

            resumes += 1
            output = machine.get_next_output()

            if output is not None:
                pending = output
                last = output

            lg.debug(f'Stage {stage} -> {state.value}, output {output}')

            waiting = [m for m in machines if not m.halted()]

            if waiting and pending is None and all(
                m.state is State.SUSPENDED_ON_MISSING_INPUT for m in waiting
            ):
                raise PipelineError(stage, message='Feedback loop stalled waiting for input')

        stage = (stage + 1) % len(machines)

    if last is None:
        raise PipelineError(len(machines) - 1, message='Feedback loop produced no output')

    return last


def best_phase_setting(
    runner: Runner, program: Sequence[int], phases: Iterable[int]
) -> Tuple[int, Tuple[int, ...]]:
    ''' Tries every ordering of the phases, returns the best signal and its ordering '''

    return max(
        (runner(program, order, 0), order)
        for order in permutations(phases)
    )
