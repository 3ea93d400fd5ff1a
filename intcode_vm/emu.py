"""
Intcode VM — Execution Engine

Integrates:
  - Memory image (mem/memory.py)
  - Instruction decoder + opcode table (cpu/decoder.py)
  - Operand resolver (cpu/resolver.py)

Execution model, one step():
  1. Fetch the instruction word at PC
  2. Decode opcode and parameter modes
  3. Fetch parameter words, resolve source operands
  4. Execute handler: update memory, input queue, output
  5. Advance PC by the instruction length, unless a jump was taken

Termination reasons (run()):
  - HALT:     opcode 99
  - FAULT:    unknown opcode, out-of-bounds address, empty input,
              invalid mode; the fault is kept in engine.fault
  - TIMEOUT:  max_steps exceeded (optional watchdog)
"""

import logging
from collections import deque
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .cpu.decoder import (
    decode_instruction, lookup_opcode,
    ADD, MUL, IN, OUT, JNZ, JZ, LT, EQ, HALT,
)
from .cpu.resolver import resolve
from .faults import IntcodeFault, UnknownOpcodeFault, InputUnderflowFault
from .mem.memory import Memory

logger = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    FAULT = 'FAULT'
    TIMEOUT = 'TIMEOUT'


class Engine:
    """Intcode interpreter for a single program run.

    Usage:
        engine = Engine(Memory([3, 0, 4, 0, 99]), inputs=[1337])
        reason = engine.run()
        engine.output     # [1337]

    An engine owns its memory, input queue and output list. It is not
    reusable: once halted or faulted, further run() calls return the
    same stop reason without executing anything.
    """

    def __init__(self, memory: Memory, inputs: Iterable[int] = (),
                 trace: bool = False):
        self.memory = memory
        self.inputs = deque(inputs)
        self.output: List[int] = []
        self.pc = 0
        self.steps = 0
        self.halted = False
        self.fault: Optional[IntcodeFault] = None

        self._trace = trace

        # Instruction dispatch table (opcode -> handler)
        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction.

        Returns StopReason.HALT when the halt opcode is reached, else None.
        Raises an IntcodeFault subclass (with .pc set) on any fault; the
        PC is left pointing at the faulting instruction.
        """
        if self.halted:
            return StopReason.HALT

        pc = self.pc
        try:
            word = self.memory.read(pc)
            opcode, modes = decode_instruction(word)

            info = lookup_opcode(opcode)
            if info is None:
                raise UnknownOpcodeFault(opcode)

            params = self.memory.read_block(pc + 1, info.params)

            if self._trace:
                logger.debug(f"{pc:5d}: {info.mnemonic:4s} {params} modes={modes}")

            handler = self._dispatch[opcode]
            next_pc = handler(params, modes)
        except IntcodeFault as fault:
            if fault.pc is None:
                fault.pc = pc
            raise

        self.steps += 1
        if next_pc is None:
            self.halted = True
            return StopReason.HALT

        self.pc = next_pc
        return None

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """Run until termination condition.

        Args:
            max_steps: instruction budget before TIMEOUT (None = unbounded)

        Returns:
            StopReason indicating why execution stopped
        """
        if self.fault is not None:
            return StopReason.FAULT

        start = self.steps
        while max_steps is None or self.steps - start < max_steps:
            try:
                reason = self.step()
            except IntcodeFault as fault:
                self.fault = fault
                logger.warning(f"Program faulted after {self.steps} steps: {fault}")
                return StopReason.FAULT
            if reason is not None:
                logger.debug(f"Halted at pc={self.pc} after {self.steps} steps, "
                             f"{len(self.output)} outputs")
                return reason

        logger.debug(f"Watchdog: {max_steps} steps without halt (pc={self.pc})")
        return StopReason.TIMEOUT

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(params, modes) -> next PC, or None to halt.
    # params holds the raw words after the opcode; destinations are always
    # the raw word (position semantics), never resolved.

    def _build_dispatch(self) -> dict:
        return {
            ADD:  self._op_add,
            MUL:  self._op_mul,
            IN:   self._op_in,
            OUT:  self._op_out,
            JNZ:  self._op_jnz,
            JZ:   self._op_jz,
            LT:   self._op_lt,
            EQ:   self._op_eq,
            HALT: self._op_halt,
        }

    def _sources(self, params, modes, count: int) -> Tuple[int, ...]:
        return tuple(resolve(params[i], modes[i], self.memory) for i in range(count))

    # ── Arithmetic / compare ──

    def _op_add(self, params, modes):
        a, b = self._sources(params, modes, 2)
        self.memory.write(params[2], a + b)
        return self.pc + 4

    def _op_mul(self, params, modes):
        a, b = self._sources(params, modes, 2)
        self.memory.write(params[2], a * b)
        return self.pc + 4

    def _op_lt(self, params, modes):
        a, b = self._sources(params, modes, 2)
        self.memory.write(params[2], 1 if a < b else 0)
        return self.pc + 4

    def _op_eq(self, params, modes):
        a, b = self._sources(params, modes, 2)
        self.memory.write(params[2], 1 if a == b else 0)
        return self.pc + 4

    # ── I/O ──

    def _op_in(self, params, modes):
        if not self.inputs:
            raise InputUnderflowFault()
        # Destination is checked before the input is consumed.
        self.memory.check(params[0])
        self.memory.write(params[0], self.inputs.popleft())
        return self.pc + 2

    def _op_out(self, params, modes):
        (value,) = self._sources(params, modes, 1)
        self.output.append(value)
        return self.pc + 2

    # ── Jumps ──

    def _op_jnz(self, params, modes):
        cond, target = self._sources(params, modes, 2)
        if cond != 0:
            self.memory.check(target)
            return target
        return self.pc + 3

    def _op_jz(self, params, modes):
        cond, target = self._sources(params, modes, 2)
        if cond == 0:
            self.memory.check(target)
            return target
        return self.pc + 3

    # ── Control ──

    def _op_halt(self, params, modes):
        return None

    # ══════════════════════════════════════════════
    # Inspection
    # ══════════════════════════════════════════════

    @property
    def stopped(self) -> bool:
        return self.halted or self.fault is not None

    def snapshot(self) -> Dict[str, object]:
        """Plain-data view of engine state, for logging and tests."""
        return {
            'pc': self.pc,
            'steps': self.steps,
            'halted': self.halted,
            'fault': str(self.fault) if self.fault else None,
            'pending_inputs': list(self.inputs),
            'output': list(self.output),
            'memory': self.memory.snapshot(),
        }
