"""
Intcode VM
==========
Interpreter for Intcode: a flat program of signed integers that serves
as both instructions and data.

Architecture:
    ┌───────────┐    ┌──────────┐    ┌─────────────────────────────┐
    │ Program   │───>│  Loader  │───>│  Engine (fetch/decode/exec) │───> output
    │ text      │    │ (Memory) │    │  Decoder + Operand Resolver │
    └───────────┘    └──────────┘    └─────────────────────────────┘

    - loader.py:        comma-separated text -> Memory image
    - mem/memory.py:    fixed-size, bounds-checked integer store
    - cpu/decoder.py:   instruction word -> (opcode, modes), opcode table
    - cpu/resolver.py:  (raw, mode, memory) -> operand value
    - emu.py:           Engine: step/run loop, halt and fault handling
    - search.py:        noun/verb search and diagnostic checks
    - disassembler.py:  linear-sweep listing of a memory image
"""

__version__ = "1.0.0"

from typing import Iterable, List, Optional

from .faults import (
    IntcodeError, LoadError, IntcodeFault, UnknownOpcodeFault,
    OutOfBoundsFault, InputUnderflowFault, InvalidModeFault,
    ExecutionTimeout, DiagnosticFailure,
)
from .mem.memory import Memory
from .cpu.decoder import decode_instruction, OPCODES
from .cpu.resolver import ParameterMode, resolve
from .loader import parse_program, read_program_file
from .emu import Engine, StopReason


def load(program_text: str, initial_inputs: Iterable[int] = (),
         trace: bool = False) -> Engine:
    """Build an engine from program text with its input queue seeded.

    Raises LoadError for malformed text; nothing has executed yet.
    """
    return Engine(Memory(parse_program(program_text)), initial_inputs, trace=trace)


def load_file(path, initial_inputs: Iterable[int] = (), trace: bool = False) -> Engine:
    return Engine(Memory(read_program_file(path)), initial_inputs, trace=trace)


def execute(engine: Engine, max_steps: Optional[int] = None) -> List[int]:
    """Run an engine to completion and return its output sequence.

    Raises the engine's IntcodeFault if the program faults, and
    ExecutionTimeout if max_steps runs out first.
    """
    reason = engine.run(max_steps=max_steps)
    if reason is StopReason.FAULT:
        raise engine.fault
    if reason is StopReason.TIMEOUT:
        raise ExecutionTimeout(engine.steps)
    return engine.output


def run_program(program_text: str, inputs: Iterable[int] = (),
                max_steps: Optional[int] = None) -> List[int]:
    """load() + execute() in one call."""
    return execute(load(program_text, inputs), max_steps=max_steps)


__all__ = [
    'IntcodeError', 'LoadError', 'IntcodeFault', 'UnknownOpcodeFault',
    'OutOfBoundsFault', 'InputUnderflowFault', 'InvalidModeFault',
    'ExecutionTimeout', 'DiagnosticFailure',
    'Memory', 'decode_instruction', 'OPCODES', 'ParameterMode', 'resolve',
    'parse_program', 'read_program_file', 'Engine', 'StopReason',
    'load', 'load_file', 'execute', 'run_program',
]
