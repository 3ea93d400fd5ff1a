"""
Noun/verb search, diagnostic runs and disassembler tests.

All programs are tiny hand-built images; no puzzle input files needed.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from intcode_vm import DiagnosticFailure, OutOfBoundsFault, ExecutionTimeout
from intcode_vm.disassembler import IntcodeDisassembler, disassemble
from intcode_vm.search import (
    answer, check_diagnostic_output, find_noun_verb, run_diagnostic, run_with_noun_verb,
)


# =============================================================================
#  NOUN / VERB
# =============================================================================

class TestNounVerb:

    def test_run_with_noun_verb(self):
        """1,9,10,3,... with noun=9 verb=10 is the worked example: 3500"""
        program = [1, 0, 0, 3, 2, 3, 11, 0, 99, 30, 40, 50]
        assert run_with_noun_verb(program, 9, 10) == 3500

    def test_program_not_mutated(self):
        program = [1101, 0, 0, 0, 99]
        run_with_noun_verb(program, 3, 4)
        assert program == [1101, 0, 0, 0, 99]

    def test_run_with_noun_verb_fault_propagates(self):
        with pytest.raises(OutOfBoundsFault):
            run_with_noun_verb([1, 0, 0, 0, 99], 50, 0)

    def test_run_with_noun_verb_timeout(self):
        with pytest.raises(ExecutionTimeout):
            run_with_noun_verb([1105, 1, 0], 1, 0, max_steps=10)

    def test_find_sum(self):
        """1101,n,v,0,99 stores n + v; first pair for 7 is (0, 7)."""
        assert find_noun_verb([1101, 0, 0, 0, 99], target=7) == (0, 7)

    def test_find_product(self):
        assert find_noun_verb([1102, 0, 0, 0, 99], target=12) == (1, 12)

    def test_faulting_candidates_skipped(self):
        """1,n,v,0,99 reads mem[n] + mem[v]; most pairs are out of bounds."""
        assert find_noun_verb([1, 0, 0, 0, 99], target=198) == (4, 4)

    def test_looping_candidates_skipped(self):
        """1105,n,v loops forever when n != 0 and v == 0."""
        program = [1105, 0, 0, 99]
        # n=0: falls through to HALT at 3, leaving 1105 at address 0
        assert find_noun_verb(program, target=1105, nouns=[1, 0], verbs=[0],
                              max_steps=20) == (0, 0)

    def test_program_too_short_for_noun_verb(self):
        """Address 2 must exist before any candidate is patched in."""
        with pytest.raises(OutOfBoundsFault) as exc:
            find_noun_verb([99, 0], target=99)
        assert exc.value.address == 2

    def test_not_found(self):
        assert find_noun_verb([1101, 0, 0, 0, 99], target=-1,
                              nouns=range(3), verbs=range(3)) is None

    def test_answer(self):
        assert answer(12, 2) == 1202


# =============================================================================
#  DIAGNOSTICS
# =============================================================================

class TestDiagnostic:

    def test_passing_diagnostic(self):
        """Reads the ID, emits two passing checks, then the ID as the code."""
        program = [3, 0, 104, 0, 104, 0, 4, 0, 99]
        assert run_diagnostic(program, system_id=7) == 7

    def test_failing_check(self):
        program = [3, 0, 104, 0, 104, 3, 4, 0, 99]
        with pytest.raises(DiagnosticFailure) as exc:
            run_diagnostic(program, system_id=7)
        assert exc.value.index == 1
        assert exc.value.value == 3

    def test_no_output(self):
        with pytest.raises(DiagnosticFailure):
            run_diagnostic([3, 0, 99])

    def test_comparator_as_diagnostic(self):
        """Three-way comparator: single output, no checks."""
        program = [int(v) for v in (
            "3,21,1008,21,8,20,1005,20,22,107,8,21,20,1006,20,31,"
            "1106,0,36,98,0,0,1002,21,125,20,4,20,1105,1,46,104,"
            "999,1105,1,46,1101,1000,1,20,4,20,1105,1,46,98,99").split(",")]
        assert run_diagnostic(program, system_id=5) == 999

    def test_check_output_directly(self):
        assert check_diagnostic_output([0, 0, 0, 42]) == 42
        assert check_diagnostic_output([5]) == 5


# =============================================================================
#  DISASSEMBLER
# =============================================================================

class TestDisassembler:

    def test_mixed_modes(self):
        insts = disassemble([1002, 4, 3, 4, 33])
        assert [i.mnemonic for i in insts] == ["MUL", "DATA"]
        mul = insts[0]
        assert mul.operands == ["[4]", "#3", "->[4]"]
        assert mul.length == 4
        assert mul.format().endswith("MUL [4], #3 ->[4]")
        assert insts[1].is_data
        assert insts[1].address == 4

    def test_io_and_halt(self):
        insts = disassemble([3, 0, 4, 0, 99])
        assert [i.mnemonic for i in insts] == ["IN", "OUT", "HALT"]
        assert insts[0].operands == ["->[0]"]
        assert insts[1].operands == ["[0]"]
        assert [i.address for i in insts] == [0, 2, 4]

    def test_jump_operands(self):
        inst = IntcodeDisassembler().decode_one([1105, 1, 9], 0)
        assert inst.mnemonic == "JNZ"
        assert inst.operands == ["#1", "#9"]

    def test_truncated_tail_is_data(self):
        insts = disassemble([99, 1, 0])
        assert [i.mnemonic for i in insts] == ["HALT", "DATA", "DATA"]

    def test_illegal_source_mode_is_data(self):
        insts = disassemble([201, 0, 0, 0])
        assert insts[0].is_data

    def test_negative_word_is_data(self):
        assert disassemble([-1])[0].is_data

    def test_negative_start_rejected(self):
        """A negative start would wrap to the tail of the image."""
        with pytest.raises(ValueError):
            disassemble([1, 0, 0, 0, 99], start=-2)

    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError):
            IntcodeDisassembler().disassemble([99, 99, 99], max_instructions=-3)

    def test_decode_one_outside_image(self):
        dis = IntcodeDisassembler()
        with pytest.raises(ValueError):
            dis.decode_one([99], -1)
        with pytest.raises(ValueError):
            dis.decode_one([99], 1)

    def test_start_and_limit(self):
        dis = IntcodeDisassembler()
        insts = dis.disassemble([99, 104, 1, 104, 2, 99], start=1, max_instructions=2)
        assert [(i.address, i.mnemonic) for i in insts] == [(1, "OUT"), (3, "OUT")]

    def test_listing_with_descriptions(self):
        text = IntcodeDisassembler().format_listing([1101, 1, 2, 0, 99],
                                                    show_description=True)
        lines = text.splitlines()
        assert len(lines) == 2
        assert "ADD #1, #2 ->[0]" in lines[0]
        assert "; mem[p3] = p1 + p2" in lines[0]
        assert "HALT" in lines[1]
