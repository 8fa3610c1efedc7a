#!/usr/bin/env python3
"""
Validation of assembled segments against their references

The validator aligns an assembly to its reference once, scores the
alignment, reconstructs every reference protein from that same alignment
and gathers segment-level findings into an AlignedAssembly.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from flu.config import ConfigManager
from flu.exceptions import ValidationError
from flu.models.assembly import (
    Assembly, AssemblyProtein, AlignedAssembly, Reference, ReferenceProtein, check_segments
)
from flu.models.errors import (
    SegmentError, ErrorAmbiguous, ErrorInsignificant, ErrorLowIdentity
)
from flu.models.segment import Segment
from flu.services.protein_scanner import build_coding_mask, compare_proteins_in_alignment
from flu.utils.alignment import (
    Column, ScoringModel, DEFAULT_AA_ALN_MODEL, DEFAULT_DNA_ALN_MODEL, align, alignment_identity
)
from flu.utils.sequence import count_ambiguous, translate


class AssemblyValidator:
    """Validates assemblies against references

    Holds only immutable settings, so one instance can validate any number
    of assemblies, from any number of threads.
    """

    def __init__(self,
                 dna_model: ScoringModel = DEFAULT_DNA_ALN_MODEL,
                 aa_model: ScoringModel = DEFAULT_AA_ALN_MODEL,
                 min_identity: Optional[float] = None):
        """Initialize validator

        Args:
            dna_model: Scoring for the assembly-to-reference alignment
            aa_model: Scoring for the protein identity alignments
            min_identity: Report ErrorLowIdentity below this whole-segment
                identity; None disables the check
        """
        self.logger = logging.getLogger("flu.services.assembly_validator")
        self.dna_model = dna_model
        self.aa_model = aa_model
        self.min_identity = min_identity

    @classmethod
    def from_config(cls, config_manager: ConfigManager) -> 'AssemblyValidator':
        """Create a validator from the alignment and validation sections"""
        dna_model = ScoringModel.from_config(config_manager.get_alignment_config('dna'),
                                             mode=DEFAULT_DNA_ALN_MODEL.mode)
        aa_model = ScoringModel.from_config(config_manager.get_alignment_config('protein'),
                                            mode=DEFAULT_AA_ALN_MODEL.mode)
        return cls(dna_model, aa_model, config_manager.get('validation.min_identity'))

    def align(self, assembly: Assembly, reference: Reference) -> List[Column]:
        """Align an assembly to a reference, assembly symbols first"""
        return align(assembly.seq, reference.seq, self.dna_model)

    def validate(self, assembly: Assembly, reference: Reference) -> AlignedAssembly:
        """Align and validate one assembly

        Args:
            assembly: The assembly
            reference: Reference of the same segment

        Returns:
            The validated assembly

        Raises:
            SegmentMismatchError: If the assembly is known to be another segment
        """
        check_segments(assembly, reference)

        alignment = tuple(self.align(assembly, reference))
        identity = alignment_identity(alignment)

        proteins = tuple(
            self.compare_protein(protein, alignment, reference)
            for protein in reference.proteins
        )

        errors: List[SegmentError] = []
        if self.min_identity is not None and identity is not None and identity < self.min_identity:
            errors.append(ErrorLowIdentity(identity))

        n_insignificant = assembly.n_insignificant
        if n_insignificant:
            errors.append(ErrorInsignificant(n_insignificant))

        n_ambiguous = count_ambiguous(assembly.seq)
        if n_ambiguous:
            errors.append(ErrorAmbiguous(n_ambiguous))

        result = AlignedAssembly(assembly, reference, alignment, identity, proteins, tuple(errors))
        self.logger.info(
            f"Validated {assembly.name} against {reference.name}: identity "
            f"{'n/a' if identity is None else f'{identity:.4f}'}, "
            f"{len(result.all_errors)} errors"
        )
        return result

    def compare_protein(self,
                        protein: ReferenceProtein,
                        alignment: Sequence[Column],
                        reference: Reference) -> AssemblyProtein:
        """Reconstruct one protein from the segment alignment

        The protein identity compares the translated reconstruction with the
        translated reference coding sequence (stop codon excluded).
        """
        coding_mask = build_coding_mask(protein, len(reference.seq))
        scan = compare_proteins_in_alignment(protein, coding_mask, alignment)

        # Nothing coding could be reconstructed, e.g. at very low identity
        if not scan.sequence:
            return AssemblyProtein(protein.variant, None, None, tuple(scan.errors))

        aa_seq = translate(scan.sequence)
        ref_aa = translate(reference.coding_sequence(protein)[:-3])
        aa_alignment = align(aa_seq, ref_aa, self.aa_model)
        identity = alignment_identity(aa_alignment)

        return AssemblyProtein(protein.variant, tuple(scan.orfs), identity, tuple(scan.errors))

    def validate_many(self,
                      assemblies: Iterable[Assembly],
                      references: Sequence[Reference]) -> Iterator[AlignedAssembly]:
        """Validate assemblies, each against the reference of its segment

        An assembly of unknown segment is only accepted when there is a
        single reference to compare against.

        Raises:
            ValidationError: If no reference can be chosen for an assembly
        """
        by_segment: Dict[Segment, Reference] = {}
        for reference in references:
            if reference.segment in by_segment:
                raise ValidationError(f"More than one reference for segment {reference.segment}",
                                      {'segment': reference.segment.value})
            by_segment[reference.segment] = reference

        for assembly in assemblies:
            if assembly.segment is not None:
                reference = by_segment.get(assembly.segment)
            elif len(references) == 1:
                reference = references[0]
            else:
                reference = None

            if reference is None:
                raise ValidationError(f"No reference for assembly {assembly.name}",
                                      {'assembly': assembly.name,
                                       'segment': None if assembly.segment is None else assembly.segment.value})
            yield self.validate(assembly, reference)


def translate_proteins(aligned: AlignedAssembly) -> List[Optional[str]]:
    """Translate the reconstructed ORFs of every protein

    Bases past the last full codon are dropped. Proteins without ORFs give
    None. The amino acid sequences are not validated.
    """
    result: List[Optional[str]] = []
    for protein in aligned.proteins:
        if protein.orfs is None:
            result.append(None)
            continue
        dna = "".join(aligned.assembly.seq[orf.to_slice()] for orf in protein.orfs)
        result.append(translate(dna))
    return result
