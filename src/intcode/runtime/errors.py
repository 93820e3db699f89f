class MachineError(Exception):
    pass


class MemoryFault(MachineError):
    def __init__(self, address: int):
        super().__init__(f'Memory fault at address {address}')
        self.address = address


class UnknownOpcode(MachineError):
    def __init__(self, value: int):
        super().__init__(f'Unknown opcode {value}')
        self.value = value


class UnknownParameterMode(MachineError):
    def __init__(self, mode: int):
        super().__init__(f'Unknown parameter mode {mode}')
        self.mode = mode


class MalformedInstruction(MachineError):
    pass


class MissingInputError(MachineError):
    def __init__(self, pointer: int):
        super().__init__(f'Input required at {pointer} but the input queue is empty')
        self.pointer = pointer


class WordOverflow(MachineError):
    def __init__(self, value: int):
        super().__init__(f'Value {value} does not fit a machine word')
        self.value = value


class ConfigurationError(MachineError):
    pass
