WORD_BITS = 64
WORD_MIN = -(1 << (WORD_BITS - 1))
WORD_MAX = (1 << (WORD_BITS - 1)) - 1

DEFAULT_MEMORY_SIZE = 0         # Memory is exactly the program unless grown

MODE_BASE = 10                  # Parameter modes are decimal digits
OPCODE_BASE = 100               # Two lowest digits select the operation
MAX_PARAMS = 3
