"""
Intcode VM — Noun/Verb Search and Diagnostic Runs

Two ways of driving whole programs:

  Noun/verb search
    Address 1 (noun) and address 2 (verb) are patched before the run;
    the result is whatever the program leaves at address 0. The search
    tries every pair in NOUN_RANGE x VERB_RANGE, fresh memory each time,
    and returns the first pair producing the target.

  Diagnostic run
    The program reads one system ID, emits a 0 for every passing check
    and finishes with a diagnostic code. Any non-zero before the last
    output means a check failed.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from . import config
from .emu import Engine, StopReason
from .faults import DiagnosticFailure, ExecutionTimeout
from .mem.memory import Memory

logger = logging.getLogger(__name__)


def run_with_noun_verb(program: Sequence[int], noun: int, verb: int,
                       max_steps: Optional[int] = None) -> int:
    """Patch noun/verb into a copy of the program, run it, return mem[0].

    Faults propagate to the caller.
    """
    memory = _patched(program, noun, verb)
    engine = Engine(memory)
    reason = engine.run(max_steps=max_steps)
    if reason is StopReason.FAULT:
        raise engine.fault
    if reason is StopReason.TIMEOUT:
        raise ExecutionTimeout(engine.steps)
    return memory.read(0)


def find_noun_verb(program: Sequence[int], target: int = config.GRAVITY_ASSIST_TARGET,
                   nouns: Iterable[int] = config.NOUN_RANGE,
                   verbs: Iterable[int] = config.VERB_RANGE,
                   max_steps: Optional[int] = config.SEARCH_MAX_STEPS
                   ) -> Optional[Tuple[int, int]]:
    """First (noun, verb) whose run leaves `target` at address 0.

    Candidates that fault or exceed max_steps are skipped. Returns None
    if no pair matches. A program too short to hold the noun and verb
    raises OutOfBoundsFault before any candidate runs.
    """
    Memory(program).check(max(config.NOUN_ADDR, config.VERB_ADDR))
    verbs = list(verbs)
    tried = 0
    for noun in nouns:
        for verb in verbs:
            tried += 1
            engine = Engine(_patched(program, noun, verb))
            reason = engine.run(max_steps=max_steps)
            if reason is not StopReason.HALT:
                logger.debug(f"noun={noun} verb={verb}: skipped ({reason.value}"
                             f"{': ' + str(engine.fault) if engine.fault else ''})")
                continue
            if engine.memory.read(0) == target:
                logger.info(f"Found noun={noun} verb={verb} after {tried} candidates")
                return noun, verb
    logger.info(f"No noun/verb pair produces {target} ({tried} candidates)")
    return None


def answer(noun: int, verb: int) -> int:
    return 100 * noun + verb


def _patched(program: Sequence[int], noun: int, verb: int) -> Memory:
    memory = Memory(program)
    memory.patch({config.NOUN_ADDR: noun, config.VERB_ADDR: verb})
    return memory


# ──────────────────────────────────────────────
# Diagnostics
# ──────────────────────────────────────────────

def check_diagnostic_output(output: List[int]) -> int:
    """Validate diagnostic output and return the final diagnostic code.

    Raises DiagnosticFailure if the output is empty or any value before
    the last one is non-zero.
    """
    if not output:
        raise DiagnosticFailure("Diagnostic program produced no output")
    for index, value in enumerate(output[:-1]):
        if value != 0:
            raise DiagnosticFailure(
                f"Diagnostic check {index} failed with value {value}", index, value)
    return output[-1]


def run_diagnostic(program: Sequence[int], system_id: int = config.DIAG_SYSTEM_ID,
                   max_steps: Optional[int] = None) -> int:
    """Run a diagnostic program for one system ID and return its code."""
    engine = Engine(Memory(program), inputs=[system_id])
    reason = engine.run(max_steps=max_steps)
    if reason is StopReason.FAULT:
        raise engine.fault
    if reason is StopReason.TIMEOUT:
        raise ExecutionTimeout(engine.steps)
    code = check_diagnostic_output(engine.output)
    logger.debug(f"System {system_id}: {len(engine.output) - 1} checks passed, code {code}")
    return code
