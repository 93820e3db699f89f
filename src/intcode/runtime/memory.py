from typing import Iterable, Iterator, List

from intcode.runtime.errors import MemoryFault, ConfigurationError


class Memory:
    cells: List[int]

    def __init__(self, program: Iterable[int]):
        self.cells = list(program)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[int]:
        return iter(self.cells)

    def __getitem__(self, address: int) -> int:
        return self.read(address)

    def __setitem__(self, address: int, value: int):
        self.write(address, value)

    def check(self, address: int):
        if address < 0 or address >= len(self.cells):
            raise MemoryFault(address)

    def read(self, address: int) -> int:
        self.check(address)
        return self.cells[address]

    def write(self, address: int, value: int):
        self.check(address)
        self.cells[address] = value

    def grow(self, size: int):
        if size < 0:
            raise ConfigurationError(f'Negative memory size {size}')

        missing = size - len(self.cells)

        if missing > 0:
            self.cells.extend([0] * missing)

    def snapshot(self) -> List[int]:
        return list(self.cells)
