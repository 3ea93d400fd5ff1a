"""
Intcode Disassembler
====================
Linear-sweep listing of an Intcode memory image.

API Usage:
    from intcode_vm.disassembler import IntcodeDisassembler

    dis = IntcodeDisassembler()
    for inst in dis.disassemble([1002, 4, 3, 4, 33]):
        print(inst.format())     # "0: 1002 4 3 4 ... MUL [4], #3 ->[4]"

Operand notation:
    [n]     position mode, value read from address n
    #n      immediate mode, literal n
    ->[n]   destination address n (always position)

Intcode mixes code and data freely, so a sweep can't tell them apart.
Words that don't decode to a known opcode (or whose parameters run past
the end of the image) are listed as one-word DATA entries and the sweep
resumes at the next word.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .cpu.decoder import OPCODES, OpcodeInfo, decode_instruction
from .cpu.resolver import ParameterMode


@dataclass
class DisassembledInstruction:
    """One decoded instruction (or DATA word) with formatting data."""
    address: int
    words: List[int]
    mnemonic: str
    operands: List[str] = field(default_factory=list)
    description: str = ""

    @property
    def length(self) -> int:
        return len(self.words)

    @property
    def is_data(self) -> bool:
        return self.mnemonic == "DATA"

    @property
    def words_str(self) -> str:
        return " ".join(str(w) for w in self.words)

    def format(self, show_description: bool = False, words_width: int = 22) -> str:
        """Format as a single listing line."""
        sources = [op for op in self.operands if not op.startswith("->")]
        dests = [op for op in self.operands if op.startswith("->")]
        asm = self.mnemonic
        if sources:
            asm += " " + ", ".join(sources)
        if dests:
            asm += " " + " ".join(dests)
        line = f"{self.address:5d}: {self.words_str.ljust(words_width)} {asm}"
        if show_description and self.description:
            line += f"  ; {self.description}"
        return line


class IntcodeDisassembler:
    """Intcode disassembler.

    Usage:
        dis = IntcodeDisassembler()
        listing = dis.disassemble(program, start=0, max_instructions=0)
        single  = dis.decode_one(program, address=0)
    """

    def __init__(self, opcodes: Optional[Dict[int, OpcodeInfo]] = None):
        self._opcodes = OPCODES if opcodes is None else opcodes

    # ── public API ──

    def disassemble(self, program: Sequence[int], start: int = 0,
                    max_instructions: int = 0) -> List[DisassembledInstruction]:
        """Disassemble from `start` to the end of the image.

        Raises ValueError for a negative start or instruction limit.
        """
        if start < 0:
            raise ValueError(f"start address must be non-negative, got {start}")
        if max_instructions < 0:
            raise ValueError(f"max_instructions must be non-negative, got {max_instructions}")
        words = list(program)
        results: List[DisassembledInstruction] = []
        address = start
        while address < len(words):
            inst = self.decode_one(words, address)
            results.append(inst)
            address += inst.length
            if max_instructions and len(results) >= max_instructions:
                break
        return results

    def decode_one(self, program: Sequence[int], address: int = 0) -> DisassembledInstruction:
        """Decode exactly one instruction at `address`."""
        if not 0 <= address < len(program):
            raise ValueError(f"address {address} outside image of {len(program)} words")
        word = program[address]
        opcode, modes = decode_instruction(word)
        info = self._opcodes.get(opcode)

        if info is None or address + info.length > len(program):
            return self._make_data(word, address)

        params = list(program[address + 1: address + info.length])
        operands = []
        for i, raw in enumerate(params):
            is_dest = info.writes and i == info.params - 1
            if is_dest:
                operands.append(f"->[{raw}]")
            elif modes[i] == ParameterMode.POSITION:
                operands.append(f"[{raw}]")
            elif modes[i] == ParameterMode.IMMEDIATE:
                operands.append(f"#{raw}")
            else:
                # Illegal mode digit: the engine would fault here.
                return self._make_data(word, address)

        return DisassembledInstruction(
            address=address,
            words=[word] + params,
            mnemonic=info.mnemonic,
            operands=operands,
            description=info.description,
        )

    def format_listing(self, program: Sequence[int], start: int = 0,
                       max_instructions: int = 0,
                       show_description: bool = False) -> str:
        return "\n".join(
            inst.format(show_description=show_description)
            for inst in self.disassemble(program, start, max_instructions)
        )

    # ── helpers ──

    @staticmethod
    def _make_data(word: int, address: int) -> DisassembledInstruction:
        return DisassembledInstruction(
            address=address,
            words=[word],
            mnemonic="DATA",
            operands=[str(word)],
            description="Data word",
        )


def disassemble(program: Sequence[int], start: int = 0) -> List[DisassembledInstruction]:
    """Module-level convenience function."""
    return IntcodeDisassembler().disassemble(program, start)
