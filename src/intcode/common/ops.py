# Opcodes
ADD = 1     # P1 +  P2 -> P3
MUL = 2     # P1 *  P2 -> P3
INP = 3     # input -> P1
OUT = 4     # P1 -> output
JIT = 5     # if P1 .ne 0 jmp P2
JIF = 6     # if P1 .eq 0 jmp P2
LTH = 7     # P1 .lt P2 -> P3
EQL = 8     # P1 .eq P2 -> P3
ARB = 9     # RB + P1 -> RB
HLT = 99

# Parameter modes
POSITION = 0
IMMEDIATE = 1
RELATIVE = 2

ARITY = {
    ADD: 3,
    MUL: 3,
    INP: 1,
    OUT: 1,
    JIT: 2,
    JIF: 2,
    LTH: 3,
    EQL: 3,
    ARB: 1,
    HLT: 0
}

NAMES = {
    ADD: 'add',
    MUL: 'mul',
    INP: 'inp',
    OUT: 'out',
    JIT: 'jit',
    JIF: 'jif',
    LTH: 'lth',
    EQL: 'eql',
    ARB: 'arb',
    HLT: 'hlt'
}
