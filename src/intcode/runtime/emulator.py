import sys
from pathlib import Path
import logging as lg
import traceback
from typing import List, Sequence, Tuple

import click

from intcode.common.program import load_program, ProgramFormatError
from intcode.common.settings import MachineSettings, load_settings
import intcode.runtime.cpu as cpu
import intcode.runtime.errors as errors


EXIT_HALT = 0
EXIT_MISSING_INPUT = 2
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def execute(program: Sequence[int], inputs: Sequence[int], settings: MachineSettings) -> List[int]:
    proc = cpu.Computer(program, settings)

    for value in inputs:
        proc.input(value)

    try:
        while proc.execute() is cpu.State.SUSPENDED_ON_OUTPUT:
            lg.debug(f'Output {proc.output[-1]}')

        if proc.state is cpu.State.SUSPENDED_ON_MISSING_INPUT:
            raise errors.MissingInputError(proc.pointer)
    finally:
        if settings.verbose:
            proc.debug_dump()

    return list(proc.get_all_output())


@click.command()
@click.pass_context
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-i', '--input', 'inputs', type=int, multiple=True, help='Input value, may be repeated')
@click.option('-m', '--memory', 'memory_size', type=int, help='Minimal memory size')
@click.option('-c', '--config', type=Path, help='TOML file with a [machine] table')
@click.argument('program_filename', type=Path)
def run(
    ctx: click.Context,
    verbose: bool,
    inputs: Tuple[int, ...],
    memory_size: int | None,
    config: Path | None,
    program_filename: Path
):
    ctx.ensure_object(MachineSettings)

    if config is not None:
        load_settings(config, ctx.obj)

    ctx.obj.update(memory_size=memory_size, verbose=verbose or None)

    lg.basicConfig(level=lg.DEBUG if ctx.obj.verbose else lg.INFO)
    lg.info('INTCODE')

    try:
        program = load_program(program_filename)
        outputs = execute(program, inputs, ctx.obj)

    except ProgramFormatError as e:
        lg.info(f'Cannot load program: {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except errors.MissingInputError as e:
        lg.info(f'Execution stopped: {e}')
        sys.exit(EXIT_MISSING_INPUT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)

    for value in outputs:
        click.echo(value)

    lg.info('Execution halted gracefully')
    sys.exit(EXIT_HALT)


if __name__ == '__main__':
    run()
