#!/usr/bin/env python3
"""
Assembly and reference models for the flu toolkit
Defines immutable value objects for references, assemblies and the
result of validating one against the other.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any, List

import numpy as np

from flu.exceptions import ValidationError, SegmentMismatchError
from flu.utils.alignment import Column
from .errors import InfluenzaError, ProteinError, AnySegmentError
from .indel import SeqRange
from .segment import Segment, Protein


@dataclass(frozen=True)
class ReferenceProtein:
    """One protein of a reference segment and its open reading frames

    ORFs are sorted, non-overlapping, inclusive ranges into the reference
    sequence. Spliced proteins (M2, NEP, ...) have more than one.
    """
    variant: Protein
    orfs: Tuple[SeqRange, ...]

    def __post_init__(self):
        orfs = tuple(sorted(SeqRange(*orf) for orf in self.orfs))
        if not orfs:
            raise ValidationError(f"Protein {self.variant} has no ORFs")

        for orf in orfs:
            if orf.is_empty() or orf.start < 1:
                raise ValidationError(f"Invalid ORF {orf} for protein {self.variant}",
                                      {'protein': str(self.variant), 'orf': tuple(orf)})

        for previous, current in zip(orfs, orfs[1:]):
            if current.start <= previous.end:
                raise ValidationError(
                    f"Overlapping ORFs {previous} and {current} for protein {self.variant}",
                    {'protein': str(self.variant)}
                )

        object.__setattr__(self, 'orfs', orfs)

    @property
    def last_coding_position(self) -> int:
        """Reference position of the last base of the stop codon"""
        return self.orfs[-1].end

    @property
    def coding_length(self) -> int:
        return sum(orf.length for orf in self.orfs)


@dataclass(frozen=True)
class Reference:
    """A curated segment an assembly can be compared against"""
    name: str
    segment: Segment
    seq: str
    proteins: Tuple[ReferenceProtein, ...]

    def __post_init__(self):
        object.__setattr__(self, 'seq', self.seq.upper())
        object.__setattr__(self, 'proteins', tuple(self.proteins))

        seqlen = len(self.seq)
        for protein in self.proteins:
            for orf in protein.orfs:
                if orf.end > seqlen:
                    raise ValidationError(
                        f"ORF {orf} of {protein.variant} exceeds reference {self.name} "
                        f"of length {seqlen}",
                        {'reference': self.name, 'orf': tuple(orf), 'length': seqlen}
                    )

    def coding_sequence(self, protein: ReferenceProtein) -> str:
        """Concatenated ORF nucleotides of one protein, stop codon included"""
        return "".join(self.seq[orf.to_slice()] for orf in protein.orfs)


@dataclass(frozen=True, eq=False)
class Assembly:
    """A DNA sequence representing one influenza segment

    ``segment`` is None when unknown. ``insignificant`` is None when no base
    is known to be insignificantly called; otherwise a read-only boolean
    array with one flag per base.
    """
    name: str
    seq: str
    segment: Optional[Segment] = None
    insignificant: Optional[np.ndarray] = None

    def __post_init__(self):
        object.__setattr__(self, 'seq', self.seq.upper())

        if self.insignificant is not None:
            flags = np.array(self.insignificant, dtype=bool)
            if flags.shape != (len(self.seq),):
                raise ValidationError(
                    f"Assembly {self.name} has {flags.size} significance flags "
                    f"for {len(self.seq)} bases",
                    {'assembly': self.name}
                )
            flags.setflags(write=False)
            object.__setattr__(self, 'insignificant', flags)

    @property
    def n_insignificant(self) -> int:
        return 0 if self.insignificant is None else int(self.insignificant.sum())

    def __len__(self) -> int:
        return len(self.seq)


@dataclass(frozen=True)
class AssemblyProtein:
    """Outcome of comparing one reference protein against an assembly

    ``orfs`` and ``identity`` are None when no coding sequence could be
    reconstructed from the alignment.
    """
    variant: Protein
    orfs: Optional[Tuple[SeqRange, ...]]
    identity: Optional[float]
    errors: Tuple[ProteinError, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'protein': self.variant.value,
            'orfs': None if self.orfs is None else [list(orf) for orf in self.orfs],
            'identity': self.identity,
            'errors': [error.to_dict() for error in self.errors],
        }


def check_segments(assembly: Assembly, reference: Reference) -> None:
    """Raise if the assembly is known to be another segment than the reference

    Raises:
        SegmentMismatchError: If both segments are known and differ
    """
    if assembly.segment is not None and assembly.segment is not reference.segment:
        raise SegmentMismatchError(
            f"Cannot align assembly {assembly.name} ({assembly.segment}) "
            f"to reference {reference.name} ({reference.segment})",
            {'assembly': assembly.name, 'reference': reference.name}
        )


@dataclass(frozen=True, eq=False)
class AlignedAssembly:
    """An assembly aligned to and validated against its reference"""
    assembly: Assembly
    reference: Reference
    alignment: Tuple[Column, ...]  # (assembly symbol or gap, reference symbol or gap)
    identity: Optional[float]
    proteins: Tuple[AssemblyProtein, ...]
    errors: Tuple[AnySegmentError, ...]

    def __post_init__(self):
        check_segments(self.assembly, self.reference)

    @property
    def all_errors(self) -> List[InfluenzaError]:
        """Segment errors followed by every protein's errors"""
        result: List[InfluenzaError] = list(self.errors)
        for protein in self.proteins:
            result.extend(protein.errors)
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            'assembly': self.assembly.name,
            'reference': self.reference.name,
            'segment': self.reference.segment.value,
            'identity': self.identity,
            'errors': [error.to_dict() for error in self.errors],
            'proteins': [protein.to_dict() for protein in self.proteins],
        }
