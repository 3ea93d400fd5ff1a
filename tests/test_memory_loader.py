"""
Memory image and program loader tests.

Usage:
  python -m pytest tests/test_memory_loader.py -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from intcode_vm import load, load_file, parse_program, LoadError, OutOfBoundsFault
from intcode_vm.loader import format_program, read_program_file
from intcode_vm.mem.memory import Memory


# =============================================================================
#  MEMORY
# =============================================================================

class TestMemory:

    def test_read_write(self):
        mem = Memory([1, 2, 3])
        mem.write(1, 42)
        assert mem.read(1) == 42
        assert len(mem) == 3

    def test_item_access(self):
        mem = Memory([1, 2, 3])
        mem[0] = 9
        assert mem[0] == 9

    def test_bounds(self):
        mem = Memory([1, 2, 3])
        for addr in (-1, 3, 100):
            with pytest.raises(OutOfBoundsFault):
                mem.read(addr)
            with pytest.raises(OutOfBoundsFault):
                mem.write(addr, 0)

    def test_no_growth(self):
        mem = Memory([0])
        with pytest.raises(OutOfBoundsFault):
            mem.write(1, 5)
        assert len(mem) == 1

    def test_copy_is_independent(self):
        original = [1, 2, 3]
        mem = Memory(original)
        mem.write(0, 7)
        assert original == [1, 2, 3]
        clone = mem.copy()
        clone.write(1, 8)
        assert mem.read(1) == 2

    def test_patch(self):
        mem = Memory([1, 0, 0, 3, 99])
        mem.patch({1: 12, 2: 2})
        assert mem.to_list() == [1, 12, 2, 3, 99]

    def test_patch_checks_all_addresses_first(self):
        mem = Memory([1, 0, 0])
        with pytest.raises(OutOfBoundsFault):
            mem.patch({1: 5, 10: 6})
        assert mem.to_list() == [1, 0, 0]

    def test_snapshot_diff(self):
        mem = Memory([1, 2, 3, 4])
        snap = mem.snapshot()
        mem.write(1, 20)
        mem.write(3, 40)
        assert mem.diff(snap) == {1: (2, 20), 3: (4, 40)}

    def test_equality(self):
        assert Memory([1, 2]) == [1, 2]
        assert Memory([1, 2]) == Memory([1, 2])
        assert Memory([1, 2]) != Memory([2, 1])

    def test_dump(self):
        mem = Memory(range(10))
        lines = mem.dump(width=4).splitlines()
        assert len(lines) == 3
        assert lines[0].split() == ["0:", "0", "1", "2", "3"]
        assert lines[2].split() == ["8:", "8", "9"]

    def test_dump_window(self):
        mem = Memory(range(10))
        assert mem.dump(start=2, length=3, width=8).split() == ["2:", "2", "3", "4"]

    def test_dump_length_none_runs_to_end(self):
        mem = Memory([5, 6, 7])
        assert mem.dump(start=1, length=None).split() == ["1:", "6", "7"]


# =============================================================================
#  LOADER
# =============================================================================

class TestParseProgram:

    def test_basic(self):
        assert parse_program("1,0,0,0,99") == [1, 0, 0, 0, 99]

    def test_whitespace_and_newline(self):
        assert parse_program(" 1, 2 ,3\n") == [1, 2, 3]

    def test_signed(self):
        assert parse_program("-1,+2,-0") == [-1, 2, 0]

    def test_single_value(self):
        assert parse_program("99") == [99]

    @pytest.mark.parametrize("text,index,token", [
        ("1,x,3", 1, "x"),
        ("1,2,", 2, ""),
        ("1,,3", 1, ""),
        ("1.5,2", 0, "1.5"),
        ("1,0x10", 1, "0x10"),
        ("1_000,2", 0, "1_000"),
        ("1 2,3", 0, "1 2"),
    ])
    def test_bad_tokens(self, text, index, token):
        with pytest.raises(LoadError) as exc:
            parse_program(text)
        assert exc.value.index == index
        assert exc.value.token == token

    def test_empty(self):
        with pytest.raises(LoadError):
            parse_program("")
        with pytest.raises(LoadError):
            parse_program("  \n")

    def test_format_roundtrip_text(self):
        assert format_program([1, -2, 3]) == "1,-2,3"


class TestLoad:

    def test_load_seeds_engine(self):
        engine = load("3,0,99", [5, 6])
        assert engine.pc == 0
        assert engine.memory.to_list() == [3, 0, 99]
        assert list(engine.inputs) == [5, 6]
        assert engine.output == []

    def test_load_error_before_execution(self):
        with pytest.raises(LoadError):
            load("1,0,0,zero,99")

    def test_load_file(self, tmp_path):
        path = tmp_path / "prog.txt"
        path.write_text("3,0,4,0,99\n", encoding="utf-8")
        assert read_program_file(path) == [3, 0, 4, 0, 99]
        engine = load_file(path, [11])
        engine.run()
        assert engine.output == [11]
