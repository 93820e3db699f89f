''' Program text codec '''

import logging as lg
from pathlib import Path
from typing import Iterable, List

import pyparsing as pp


Program = List[int]


class ProgramFormatError(Exception):
    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(f'{message} (line {line}, column {column})')
        self.line = line
        self.column = column


value = pp.pyparsing_common.signed_integer
program = pp.DelimitedList(value, delim=',') + pp.StringEnd()


def parse_program(text: str) -> Program:
    try:
        values = program.parse_string(text.strip(), parse_all=True)
    except pp.ParseException as e:
        raise ProgramFormatError(f'Malformed program: {e.msg}', e.lineno, e.col) from e

    return [int(v) for v in values]


def parse_programs(text: str) -> List[Program]:
    programs: List[Program] = []

    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue

        try:
            programs.append(parse_program(line))
        except ProgramFormatError as e:
            raise ProgramFormatError(f'Malformed program on line {number}', number, e.column) from e

    return programs


def load_program(path: str | Path) -> Program:
    if isinstance(path, str):
        path = Path(path)

    lg.debug(f'Loading program {path}')
    return parse_program(path.read_text())


def format_program(values: Iterable[int]) -> str:
    return ','.join(str(v) for v in values)
