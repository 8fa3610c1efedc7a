#!/usr/bin/env python3
"""
Coordinate ranges and indels

All coordinates are 1-based and both ends are inclusive, the convention
used for ORF annotations.
"""
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple

from flu.exceptions import ValidationError


class SeqRange(NamedTuple):
    """Inclusive 1-based range; empty when end < start"""
    start: int
    end: int

    @property
    def length(self) -> int:
        return max(0, self.end - self.start + 1)

    def is_empty(self) -> bool:
        return self.end < self.start

    def to_slice(self) -> slice:
        """Slice selecting this range from a 0-based Python string"""
        return slice(self.start - 1, self.end)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Indel:
    """An insertion or deletion relative to the reference

    For a deletion, ``range`` holds the deleted reference positions; for an
    insertion it holds the inserted assembly positions. The other sequence
    aligns between ``position`` and ``position + 1``.
    """
    range: SeqRange
    position: int
    is_deletion: bool

    def __post_init__(self):
        rng = SeqRange(*self.range)
        if rng.is_empty():
            raise ValidationError(f"Cannot have zero-length indel: {rng}",
                                  {'range': tuple(rng), 'position': self.position})
        object.__setattr__(self, 'range', rng)

    @property
    def length(self) -> int:
        return self.range.length

    def message(self) -> str:
        between = f"{self.position}/{self.position + 1}"
        if self.is_deletion:
            return f"Deletion of ref pos {self.range} b/w pos {between}"
        return f"Insertion of bases {self.range} b/w ref pos {between}"

    def __str__(self) -> str:
        return self.message()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.range.start,
            'end': self.range.end,
            'position': self.position,
            'is_deletion': self.is_deletion,
        }
