from .decoder import (
    MAX_PARAMS, OPCODES, OpcodeInfo, decode_instruction, lookup_opcode,
    ADD, MUL, IN, OUT, JNZ, JZ, LT, EQ, HALT,
)
from .resolver import ParameterMode, resolve

__all__ = [
    'MAX_PARAMS', 'OPCODES', 'OpcodeInfo', 'decode_instruction', 'lookup_opcode',
    'ADD', 'MUL', 'IN', 'OUT', 'JNZ', 'JZ', 'LT', 'EQ', 'HALT',
    'ParameterMode', 'resolve',
]
