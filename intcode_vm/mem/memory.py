"""
Intcode VM — Fixed-Size Memory Image

Memory is a flat list of signed integers that holds both the program
and its data. The size is fixed when the image is loaded; there is no
growth on out-of-range writes.

Every read and write is bounds-checked. An address outside [0, size)
raises OutOfBoundsFault (the engine stamps the pc onto it).
"""

from typing import Dict, Iterable, List, Optional, Tuple

from ..faults import OutOfBoundsFault


class Memory:
    """Mutable integer store for one program run.

    Usage:
        mem = Memory([1, 0, 0, 0, 99])
        mem.read(4)          # 99
        mem.write(0, 2)
        before = mem.snapshot()
        ...
        mem.diff(before)     # {addr: (old, new)}
    """

    __slots__ = ('_cells',)

    def __init__(self, cells: Iterable[int]):
        self._cells: List[int] = list(cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, addr: int) -> int:
        return self.read(addr)

    def __setitem__(self, addr: int, value: int):
        self.write(addr, value)

    def __iter__(self):
        return iter(self._cells)

    def __eq__(self, other) -> bool:
        if isinstance(other, Memory):
            return self._cells == other._cells
        if isinstance(other, (list, tuple)):
            return self._cells == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Memory({self._cells!r})"

    # --- Core read/write ---

    def check(self, addr: int):
        """Raise OutOfBoundsFault unless addr is a valid cell index."""
        if addr < 0 or addr >= len(self._cells):
            raise OutOfBoundsFault(addr, len(self._cells))

    def read(self, addr: int) -> int:
        self.check(addr)
        return self._cells[addr]

    def write(self, addr: int, value: int):
        self.check(addr)
        self._cells[addr] = value

    def read_block(self, start: int, count: int) -> List[int]:
        """Read `count` consecutive cells starting at `start`."""
        return [self.read(addr) for addr in range(start, start + count)]

    # --- Patching (noun/verb style setup before a run) ---

    def patch(self, values: Dict[int, int]):
        """Write several cells at once. All addresses are checked first."""
        for addr in values:
            self.check(addr)
        for addr, value in values.items():
            self._cells[addr] = value

    # --- Snapshots ---

    def snapshot(self) -> Tuple[int, ...]:
        """Immutable copy of the whole image."""
        return tuple(self._cells)

    def to_list(self) -> List[int]:
        return list(self._cells)

    def copy(self) -> 'Memory':
        return Memory(self._cells)

    def diff(self, before: Tuple[int, ...]) -> Dict[int, Tuple[int, int]]:
        """Compare a snapshot against current contents.

        Returns {addr: (old, new)} for every cell that changed.
        """
        changes = {}
        for addr, (old, new) in enumerate(zip(before, self._cells)):
            if old != new:
                changes[addr] = (old, new)
        return changes

    # --- Dump ---

    def dump(self, start: int = 0, length: Optional[int] = None, width: int = 8) -> str:
        """Text listing of memory, `width` cells per line."""
        end = len(self._cells) if length is None else min(start + length, len(self._cells))
        lines = []
        for row in range(start, end, width):
            cells = self._cells[row:min(row + width, end)]
            lines.append(f"{row:5d}: " + ' '.join(f'{v:>6d}' for v in cells))
        return '\n'.join(lines)
