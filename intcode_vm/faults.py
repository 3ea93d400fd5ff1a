"""
Intcode VM — Error and Fault Types

Two families:
  LoadError      program text could not be parsed; raised before any
                 instruction runs.
  IntcodeFault   run-time condition that aborts execution. The engine
                 stamps the program counter of the faulting instruction
                 onto the fault before it leaves step().

Everything derives from IntcodeError so callers can catch the lot.
"""

from typing import Optional

__all__ = [
    'IntcodeError', 'LoadError', 'IntcodeFault', 'UnknownOpcodeFault',
    'OutOfBoundsFault', 'InputUnderflowFault', 'InvalidModeFault',
    'ExecutionTimeout', 'DiagnosticFailure',
]


class IntcodeError(Exception):
    """Base class for every error raised by intcode_vm."""


class LoadError(IntcodeError):
    """Raised when program text contains a token that is not an integer."""
    def __init__(self, message: str, index: int = -1, token: str = ""):
        self.index = index
        self.token = token
        if index >= 0:
            message = f"Token {index} ({token!r}): {message}"
        super().__init__(message)


# ──────────────────────────────────────────────
# Run-time faults
# ──────────────────────────────────────────────

class IntcodeFault(IntcodeError):
    """A fatal run-time condition. `pc` is None until the engine fills it in."""

    def __init__(self, pc: Optional[int] = None):
        self.pc = pc
        super().__init__()

    def describe(self) -> str:
        return "fault"

    def __str__(self) -> str:
        if self.pc is None:
            return self.describe()
        return f"pc={self.pc}: {self.describe()}"


class UnknownOpcodeFault(IntcodeFault):
    def __init__(self, opcode: int, pc: Optional[int] = None):
        self.opcode = opcode
        super().__init__(pc)

    def describe(self) -> str:
        return f"unknown opcode {self.opcode}"


class OutOfBoundsFault(IntcodeFault):
    """Address outside [0, size) was read, written or jumped to."""
    def __init__(self, address: int, size: int, pc: Optional[int] = None):
        self.address = address
        self.size = size
        super().__init__(pc)

    def describe(self) -> str:
        return f"address {self.address} out of bounds (memory size {self.size})"


class InputUnderflowFault(IntcodeFault):
    def describe(self) -> str:
        return "input instruction executed with an empty input queue"


class InvalidModeFault(IntcodeFault):
    def __init__(self, mode: int, pc: Optional[int] = None):
        self.mode = mode
        super().__init__(pc)

    def describe(self) -> str:
        return f"invalid parameter mode {self.mode}"


# ──────────────────────────────────────────────
# Caller-side errors
# ──────────────────────────────────────────────

class ExecutionTimeout(IntcodeError):
    """The step watchdog expired before the program halted."""
    def __init__(self, steps: int):
        self.steps = steps
        super().__init__(f"Program did not halt within {steps} steps")


class DiagnosticFailure(IntcodeError):
    """A diagnostic program reported a failing check."""
    def __init__(self, message: str, index: int = -1, value: Optional[int] = None):
        self.index = index
        self.value = value
        super().__init__(message)
