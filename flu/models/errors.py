#!/usr/bin/env python3
"""
Error taxonomy for validated assemblies

These are findings about a sequenced sample, not exceptions: the validator
collects them into result objects and never raises them. Each kind carries
only the data needed to describe itself and renders a sentence via str().

Segment-level kinds derive from SegmentError, protein-level kinds from
ProteinError; ErrorLowIdentity belongs to both families.
"""
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional, Union

from flu.exceptions import ValidationError
from .indel import Indel
from .segment import Protein


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def _percent(fraction: float) -> float:
    return round(fraction * 100, 1)


class InfluenzaError:
    """Base of every finding kind"""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'kind': self.kind, 'message': str(self)}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Indel):
                value = value.to_dict()
            elif isinstance(value, Enum):
                value = value.value
            result[f.name] = value
        return result


class SegmentError(InfluenzaError):
    """Finding about the segment as a whole"""


class ProteinError(InfluenzaError):
    """Finding about one protein of the segment"""


@dataclass(frozen=True)
class ErrorLowIdentity(SegmentError, ProteinError):
    """Protein or DNA sequence has too low identity compared to the reference"""
    identity: float

    def __str__(self) -> str:
        return f"Identity to reference low at {_percent(self.identity)} %"


# Segment errors

@dataclass(frozen=True)
class ErrorTooShort(SegmentError):
    """The segment is too short"""
    length: int

    def __str__(self) -> str:
        return f"Sequence too short at {_plural(self.length, 'base')}"


@dataclass(frozen=True)
class ErrorInsignificant(SegmentError):
    """Too many bases are insignificantly called in the sequence"""
    n_insignificant: int

    def __str__(self) -> str:
        return f"Sequence has {_plural(self.n_insignificant, 'insignificant base')}"


@dataclass(frozen=True)
class ErrorAmbiguous(SegmentError):
    """Too many bases or amino acids are ambiguous"""
    n_ambiguous: int

    def __str__(self) -> str:
        return f"Sequence has {_plural(self.n_ambiguous, 'ambiguous base')}"


@dataclass(frozen=True)
class ErrorLowDepthBases(SegmentError):
    """Some particular bases have too low depth"""
    n: int

    def __str__(self) -> str:
        return f"Sequence has {_plural(self.n, 'low-depth base')}"


@dataclass(frozen=True)
class ErrorLowCoverage(SegmentError):
    """Fraction of reference covered by reads is too low"""
    coverage: float

    def __str__(self) -> str:
        return f"Coverage is low at {self.coverage:.3f}"


@dataclass(frozen=True)
class ErrorAssemblyNotConverged(SegmentError):
    """N'th round of assembly is too different from the N-1'th round"""
    identity: float

    def __str__(self) -> str:
        return f"Assembly not converged, at {_percent(self.identity)} % identity"


@dataclass(frozen=True)
class ErrorLinkerContamination(SegmentError):
    """Sequence is flanked by invalid sequence, probably linkers or primers"""
    fiveprime: Optional[int]
    threeprime: Optional[int]

    def __post_init__(self):
        if self.fiveprime is None and self.threeprime is None:
            raise ValidationError("Linker contamination needs at least one contaminated end")

    def __str__(self) -> str:
        ends = []
        if self.fiveprime is not None:
            ends.append(f"first {_plural(self.fiveprime, 'base')}")
        if self.threeprime is not None:
            ends.append(f"last {_plural(self.threeprime, 'base')}")
        return "Linker/primer contamination at ends, check " + " and ".join(ends)


@dataclass(frozen=True)
class ErrorMissingProtein(SegmentError):
    """The segment is missing a non-auxiliary protein"""
    protein: Protein

    def __str__(self) -> str:
        return f'Missing non-auxiliary protein: "{self.protein}"'


# Protein errors

@dataclass(frozen=True)
class ErrorFrameShift(ProteinError):
    """Indel whose length is not a multiple of 3"""
    indel: Indel

    def __str__(self) -> str:
        return f"Frameshift: {self.indel.message()}"


@dataclass(frozen=True)
class ErrorIndelTooBig(ProteinError):
    """An indel is too big to be biologically plausible"""
    indel: Indel

    def __str__(self) -> str:
        return f"Indel too big: {self.indel.message()}"


@dataclass(frozen=True)
class ErrorFivePrimeDeletion(ProteinError):
    """5' end of the protein is deleted, which rarely happens naturally"""
    indel: Indel

    def __str__(self) -> str:
        return f"Deletion of {_plural(self.indel.length, 'base')} at 5' end"


@dataclass(frozen=True)
class ErrorEarlyStop(ProteinError):
    """A stop codon appears before the reference stop

    There is no expected position: the assembly may end before the part of
    the alignment where the stop ought to be.
    """
    observed_pos: int
    expected_naa: int
    observed_naa: int

    def __str__(self) -> str:
        return (f"Protein stops early at segment pos {self.observed_pos} after "
                f"{self.observed_naa} aa, reference is {self.expected_naa} aa")


@dataclass(frozen=True)
class ErrorLateStop(ProteinError):
    """Stop codon is mutated, protein stops later than expected"""
    expected_pos: int
    observed_pos: int
    expected_naa: int
    observed_naa: int

    def __str__(self) -> str:
        return (f"Protein stops late at segment pos {self.observed_pos} after "
                f"{self.observed_naa} aa, reference stops at {self.expected_pos} "
                f"after {self.expected_naa} aa")


@dataclass(frozen=True)
class ErrorNoStop(ProteinError):
    """ORF runs over the edge of the sequence"""

    def __str__(self) -> str:
        return "No stop codon"


@dataclass(frozen=True)
class ErrorCDSNotDivisible(ProteinError):
    """Length of the coding sequence is not divisible by 3"""
    length: int

    def __post_init__(self):
        if self.length % 3 == 0:
            raise ValidationError(f"CDS length {self.length} is divisible by 3",
                                  {'length': self.length})

    def __str__(self) -> str:
        return f"CDS has length {self.length}, not divisible by 3"


AnySegmentError = Union[
    ErrorLowIdentity, ErrorTooShort, ErrorInsignificant, ErrorAmbiguous,
    ErrorLowDepthBases, ErrorLowCoverage, ErrorAssemblyNotConverged,
    ErrorLinkerContamination, ErrorMissingProtein,
]

AnyProteinError = Union[
    ErrorLowIdentity, ErrorFrameShift, ErrorIndelTooBig, ErrorFivePrimeDeletion,
    ErrorEarlyStop, ErrorLateStop, ErrorNoStop, ErrorCDSNotDivisible,
]
