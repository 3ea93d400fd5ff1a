"""
Intcode VM — Operand Resolver

Turns a raw parameter word into the value an instruction operates on:

  POSITION   (0)  parameter is an address, read memory there
  IMMEDIATE  (1)  parameter is the value itself

Only source parameters go through here. Destination parameters are
always used as raw addresses, whatever their mode digit says.
"""

from enum import IntEnum

from ..faults import InvalidModeFault


class ParameterMode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1


def resolve(raw: int, mode: int, memory) -> int:
    """Effective value of a source parameter. Never mutates memory.

    Raises OutOfBoundsFault for a position-mode address outside memory
    and InvalidModeFault for a mode digit other than 0 or 1.
    """
    if mode == ParameterMode.POSITION:
        return memory.read(raw)
    if mode == ParameterMode.IMMEDIATE:
        return raw
    raise InvalidModeFault(mode)
