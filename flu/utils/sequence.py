#!/usr/bin/env python3
"""
Sequence utilities for the flu toolkit
Functions for working with nucleotide and amino acid sequences
"""
import logging

from Bio.Seq import translate as bio_translate

logger = logging.getLogger("flu.utils.sequence")

UNAMBIGUOUS_DNA = frozenset('ACGT')
STOP_CODONS = frozenset(('TAA', 'TAG', 'TGA'))

# Rolling codon value that can never be a stop codon
NON_STOP_CODON = 'AAA'


def is_stop(codon: str) -> bool:
    """Return whether the codon is TAA, TAG or TGA"""
    return codon in STOP_CODONS


def push_codon(codon: str, nt: str) -> str:
    """Shift one nucleotide into a 3-base codon register

    An ambiguous nucleotide can never complete a stop codon, so it resets
    the register to NON_STOP_CODON.

    Args:
        codon: Current 3-base register
        nt: Incoming nucleotide

    Returns:
        The updated register
    """
    if nt not in UNAMBIGUOUS_DNA:
        return NON_STOP_CODON
    return codon[1:] + nt


def count_ambiguous(seq: str) -> int:
    """Count bases other than A, C, G and T

    Args:
        seq: Upper-case nucleotide sequence

    Returns:
        Number of ambiguous bases
    """
    return sum(1 for nt in seq if nt not in UNAMBIGUOUS_DNA)


def translate(dna: str) -> str:
    """Translate a nucleotide sequence with the standard code

    Trailing bases that do not fill a codon are dropped. Codons with
    ambiguous bases translate to the amino acid they all encode, or X.

    Args:
        dna: Nucleotide sequence

    Returns:
        Amino acid sequence, stops rendered as '*'
    """
    usable = len(dna) - len(dna) % 3
    if usable != len(dna):
        logger.debug(f"Dropping {len(dna) - usable} trailing bases before translation")
    return bio_translate(dna[:usable])
