import logging as lg
import tomllib
from pathlib import Path

from intcode.common.hwconf import DEFAULT_MEMORY_SIZE


class MachineSettings:
    memory_size: int
    halt_on_output: bool
    halt_on_missing_input: bool
    verbose: bool

    def __init__(self):
        self.memory_size = DEFAULT_MEMORY_SIZE
        self.halt_on_output = False
        self.halt_on_missing_input = False
        self.verbose = False

    def update(
        self,
        memory_size: int | None = None,
        halt_on_output: bool | None = None,
        halt_on_missing_input: bool | None = None,
        verbose: bool | None = None
    ):
        if memory_size is not None:
            self.memory_size = memory_size

        if halt_on_output is not None:
            self.halt_on_output = halt_on_output

        if halt_on_missing_input is not None:
            self.halt_on_missing_input = halt_on_missing_input

        if verbose is not None:
            self.verbose = verbose

        return self


def load_settings(path: str | Path, settings: MachineSettings | None = None) -> MachineSettings:
    ''' Reads the [machine] table of a TOML file on top of given settings '''

    if isinstance(path, str):
        path = Path(path)

    if settings is None:
        settings = MachineSettings()

    lg.debug(f'Loading machine settings from {path}')
    config = tomllib.loads(path.read_text())
    machine = config.get('machine', {})

    unknown = set(machine) - {'memory_size', 'halt_on_output', 'halt_on_missing_input', 'verbose'}

    if unknown:
        raise UserWarning(f'Unknown machine settings {sorted(unknown)} in {path}')

    return settings.update(**machine)
