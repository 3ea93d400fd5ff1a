"""
Intcode VM — Instruction Decoder / Opcode Table

An instruction word packs the opcode into its two low decimal digits
and one addressing-mode digit per parameter above that:

    ABCDE
     1002
    DE  opcode (02 = MUL)
    C   mode of parameter 1 (0 = position)
    B   mode of parameter 2 (1 = immediate)
    A   mode of parameter 3 (0, omitted leading zero)

decode_instruction() never fails: any word splits into an opcode and
MAX_PARAMS mode digits. Whether the opcode exists, and whether a mode
digit is legal, is decided later by the engine and the resolver.
"""

from typing import Dict, NamedTuple, Optional, Tuple

# Upper bound on parameters per instruction; no opcode takes more.
MAX_PARAMS = 3

# ──────────────────────────────────────────────
# Opcode numbers
# ──────────────────────────────────────────────

ADD  = 1
MUL  = 2
IN   = 3
OUT  = 4
JNZ  = 5    # jump-if-true
JZ   = 6    # jump-if-false
LT   = 7
EQ   = 8
HALT = 99


class OpcodeInfo(NamedTuple):
    """Static metadata for one opcode."""
    mnemonic: str
    params: int         # parameter words following the opcode word
    writes: bool        # last parameter is a destination address
    description: str = ""

    @property
    def length(self) -> int:
        """Total words including the opcode word."""
        return 1 + self.params


# Format: opcode -> OpcodeInfo(mnemonic, params, writes, description)
OPCODES: Dict[int, OpcodeInfo] = {
    ADD:  OpcodeInfo('ADD',  3, True,  "mem[p3] = p1 + p2"),
    MUL:  OpcodeInfo('MUL',  3, True,  "mem[p3] = p1 * p2"),
    IN:   OpcodeInfo('IN',   1, True,  "mem[p1] = next input"),
    OUT:  OpcodeInfo('OUT',  1, False, "emit p1"),
    JNZ:  OpcodeInfo('JNZ',  2, False, "if p1 != 0: pc = p2"),
    JZ:   OpcodeInfo('JZ',   2, False, "if p1 == 0: pc = p2"),
    LT:   OpcodeInfo('LT',   3, True,  "mem[p3] = p1 < p2"),
    EQ:   OpcodeInfo('EQ',   3, True,  "mem[p3] = p1 == p2"),
    HALT: OpcodeInfo('HALT', 0, False, "stop"),
}


def decode_instruction(word: int) -> Tuple[int, Tuple[int, ...]]:
    """Split an instruction word into (opcode, modes).

    `modes` always has MAX_PARAMS entries, missing digits are 0.

    Negative words use truncated division, so -1 decodes to opcode -1
    rather than 99 and is rejected as unknown instead of halting.
    """
    sign = -1 if word < 0 else 1
    magnitude = abs(word)

    opcode = sign * (magnitude % 100)
    rest = magnitude // 100
    modes = []
    for _ in range(MAX_PARAMS):
        modes.append(rest % 10)
        rest //= 10
    return opcode, tuple(modes)


def lookup_opcode(opcode: int) -> Optional[OpcodeInfo]:
    """Return metadata for a known opcode, else None."""
    return OPCODES.get(opcode)
