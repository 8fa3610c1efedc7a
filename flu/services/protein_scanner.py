#!/usr/bin/env python3
"""
Reconstruction of protein coding sequences from a segment alignment

The scanner walks the alignment of an assembly to its reference once per
reference protein. In that single pass it rebuilds the protein's ORFs in
assembly coordinates and records 5' deletions, indels, frameshifts and
premature or late stop codons, so every reported position comes from the
same coordinate bookkeeping.
"""
import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from flu.models.errors import (
    ProteinError, ErrorFivePrimeDeletion, ErrorFrameShift, ErrorIndelTooBig,
    ErrorEarlyStop, ErrorLateStop, ErrorNoStop, ErrorCDSNotDivisible,
)
from flu.models.indel import Indel, SeqRange
from flu.models.assembly import ReferenceProtein
from flu.utils.alignment import GAP
from flu.utils.sequence import NON_STOP_CODON, is_stop, push_codon

logger = logging.getLogger("flu.services.protein_scanner")

# Longest indels, in bases, that are still biologically plausible
MAX_DELETION_LENGTH = 21
MAX_INSERTION_LENGTH = 36


class ScanResult(NamedTuple):
    """Output of one scan

    sequence: in-frame coding nucleotides of the assembly, stop codon removed
    orfs: reconstructed ORFs in assembly coordinates
    errors: protein errors found
    indels: every indel found within the coding region
    """
    sequence: str
    orfs: List[SeqRange]
    errors: List[ProteinError]
    indels: List[Indel]


def build_coding_mask(protein: ReferenceProtein, reference_length: int) -> np.ndarray:
    """Boolean flag per reference position (index = position - 1), true inside any ORF"""
    mask = np.zeros(reference_length, dtype=bool)
    for orf in protein.orfs:
        mask[orf.to_slice()] = True
    return mask


def _check_indel(indel: Indel, max_length: int, errors: List[ProteinError]) -> None:
    if indel.length % 3:
        errors.append(ErrorFrameShift(indel))
    if indel.length > max_length:
        errors.append(ErrorIndelTooBig(indel))


def compare_proteins_in_alignment(
    protein: ReferenceProtein,
    coding_mask: np.ndarray,
    alignment: Iterable[Tuple[str, str]]
) -> ScanResult:
    """Compare one reference protein against an assembly-to-reference alignment

    Args:
        protein: The reference protein
        coding_mask: Output of build_coding_mask for the protein
        alignment: Columns of (assembly symbol, reference symbol), GAP for gaps

    Returns:
        ScanResult for the protein
    """
    nucleotides: List[str] = []
    last_coding_ref_pos = protein.last_coding_position
    expected_naa = int(coding_mask.sum()) // 3
    codon = NON_STOP_CODON
    seg_pos = ref_pos = n_deletions = n_insertions = 0
    fiveprime_truncated = 0
    expected_stop: Optional[int] = None
    errors: List[ProteinError] = []
    indels: List[Indel] = []
    orfs: List[SeqRange] = []
    seg_orfstart: Optional[int] = None

    for seg_nt, ref_nt in alignment:
        seg_gap = seg_nt == GAP
        ref_gap = ref_nt == GAP
        seg_pos += not seg_gap
        ref_pos += not ref_gap
        is_coding = ref_pos > 0 and bool(coding_mask[ref_pos - 1])

        # Last positions passed before this column
        prev_seg_pos = seg_pos - (not seg_gap)
        prev_ref_pos = ref_pos - (not ref_gap)

        # 5' truncation: coding reference bases before the assembly starts
        if seg_pos == 0:
            fiveprime_truncated += is_coding
        else:
            if fiveprime_truncated:
                indel = Indel(SeqRange(prev_ref_pos - n_deletions + 1, prev_ref_pos), 0, True)
                errors.append(ErrorFivePrimeDeletion(indel))
            fiveprime_truncated = 0

        if is_coding:
            if seg_orfstart is None and not seg_gap:
                seg_orfstart = seg_pos
        elif seg_orfstart is not None:
            orfs.append(SeqRange(seg_orfstart, prev_seg_pos))
            seg_orfstart = None

        if expected_stop is None and ref_pos == last_coding_ref_pos:
            expected_stop = seg_pos

        if not is_coding:
            continue

        # Deletions, and extending the reconstructed sequence
        if seg_gap:
            n_deletions += 1
        else:
            codon = push_codon(codon, seg_nt)
            nucleotides.append(seg_nt)
            if n_deletions:
                indel = Indel(SeqRange(prev_ref_pos - n_deletions + 1, prev_ref_pos),
                              seg_pos - 1, True)
                indels.append(indel)
                _check_indel(indel, MAX_DELETION_LENGTH, errors)
                n_deletions = 0

        # Insertions
        if ref_gap:
            n_insertions += 1
        elif n_insertions:
            indel = Indel(SeqRange(prev_seg_pos - n_insertions + 1, prev_seg_pos),
                          ref_pos - 1, False)
            indels.append(indel)
            _check_indel(indel, MAX_INSERTION_LENGTH, errors)
            n_insertions = 0

        # A stop only counts in frame, not split across an intron
        if is_stop(codon) and len(nucleotides) % 3 == 0:
            n_aa = len(nucleotides) // 3
            if expected_stop is None:
                errors.append(ErrorEarlyStop(seg_pos, expected_naa, n_aa))
            elif expected_stop != seg_pos:
                errors.append(ErrorLateStop(expected_stop, seg_pos, expected_naa, n_aa))
            break

    if seg_orfstart is not None:
        orfs.append(SeqRange(seg_orfstart, seg_pos))

    remnant = len(nucleotides) % 3
    if remnant:
        errors.append(ErrorCDSNotDivisible(len(nucleotides)))
        del nucleotides[-remnant:]

    if not nucleotides or not is_stop("".join(nucleotides[-3:])):
        errors.append(ErrorNoStop())
    else:
        del nucleotides[-3:]

    logger.debug(f"{protein.variant}: {len(nucleotides)} coding bases in {len(orfs)} ORFs, "
                 f"{len(indels)} indels, {len(errors)} errors")
    return ScanResult("".join(nucleotides), orfs, errors, indels)
