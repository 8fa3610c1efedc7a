#!/usr/bin/env python3
"""
Pairwise alignment for the flu toolkit

Wraps Biopython's PairwiseAligner behind ``align``, which returns the
alignment as a list of columns ``(symbol_a, symbol_b)`` with GAP standing
in for a gap on either side. Everything downstream works on columns only.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from Bio.Align import PairwiseAligner, substitution_matrices

from flu.exceptions import AlignmentError, ConfigurationError

logger = logging.getLogger("flu.utils.alignment")

GAP = '-'
ALIGNMENT_MODES = ('global', 'overlap', 'semiglobal')

Column = Tuple[str, str]

# Stand-ins for symbols a substitution matrix has no row for, in order of preference
WILDCARD_SYMBOLS = ('X', 'N')


@dataclass(frozen=True)
class ScoringModel:
    """Affine gap scoring: a gap of length k scores gap_open + k * gap_extend

    Modes:
        global: every gap is penalized
        overlap: gaps at either end of either sequence are free
        semiglobal: gaps at the ends of the second sequence are free, so it
            may align to any part of the first
    """
    matrix: str
    gap_open: float
    gap_extend: float
    mode: str = 'global'

    def __post_init__(self):
        if self.mode not in ALIGNMENT_MODES:
            raise ConfigurationError(f"Unknown alignment mode: {self.mode}",
                                     {'allowed': ALIGNMENT_MODES})

    @classmethod
    def from_config(cls, settings: dict, mode: str) -> 'ScoringModel':
        """Build a model from an alignment.dna / alignment.protein section

        Raises:
            ConfigurationError: If a setting is missing
        """
        try:
            return cls(matrix=settings['matrix'],
                       gap_open=settings['gap_open'],
                       gap_extend=settings['gap_extend'],
                       mode=mode)
        except KeyError as e:
            raise ConfigurationError(f"Missing alignment setting: {e.args[0]}") from e


# EDNAFULL is distributed by Biopython as NUC.4.4
DEFAULT_DNA_ALN_MODEL = ScoringModel('NUC.4.4', gap_open=-25, gap_extend=-2, mode='overlap')
DEFAULT_AA_ALN_MODEL = ScoringModel('BLOSUM62', gap_open=-10, gap_extend=-2, mode='global')
CLEAVAGE_ALN_MODEL = ScoringModel('BLOSUM62', gap_open=-10, gap_extend=-2, mode='semiglobal')


@lru_cache(maxsize=None)
def _get_aligner(model: ScoringModel) -> PairwiseAligner:
    """Configure a PairwiseAligner for a scoring model"""
    try:
        matrix = substitution_matrices.load(model.matrix)
    except (FileNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown substitution matrix: {model.matrix}") from e

    aligner = PairwiseAligner()
    aligner.mode = 'global'
    aligner.substitution_matrix = matrix
    # Biopython charges the open score for the first gap position only
    aligner.open_gap_score = model.gap_open + model.gap_extend
    aligner.extend_gap_score = model.gap_extend

    if model.mode == 'overlap':
        aligner.end_gap_score = 0.0
    elif model.mode == 'semiglobal':
        aligner.query_end_gap_score = 0.0

    logger.debug(f"Configured aligner for {model}")
    return aligner


def _mask_unknown_symbols(seq: str, aligner: PairwiseAligner) -> str:
    """Replace symbols missing from the substitution matrix by its wildcard

    Translation emits IUPAC letters such as J (I or L) that BLOSUM62 lacks;
    they score as X. Sequences are returned unchanged if the matrix has no
    wildcard.
    """
    alphabet = aligner.substitution_matrix.alphabet
    wildcard = next((w for w in WILDCARD_SYMBOLS if w in alphabet), None)
    if wildcard is None or all(symbol in alphabet for symbol in seq):
        return seq
    return "".join(symbol if symbol in alphabet else wildcard for symbol in seq)


def _alignment_columns(aligned_blocks, seq_a: str, seq_b: str) -> List[Column]:
    """Expand Biopython's aligned blocks into gapped columns"""
    columns: List[Column] = []
    pos_a = pos_b = 0

    for (start_a, end_a), (start_b, end_b) in zip(*aligned_blocks):
        columns.extend((seq_a[i], GAP) for i in range(pos_a, start_a))
        columns.extend((GAP, seq_b[i]) for i in range(pos_b, start_b))
        columns.extend(zip(seq_a[start_a:end_a], seq_b[start_b:end_b]))
        pos_a, pos_b = end_a, end_b

    columns.extend((seq_a[i], GAP) for i in range(pos_a, len(seq_a)))
    columns.extend((GAP, seq_b[i]) for i in range(pos_b, len(seq_b)))
    return columns


def align(seq_a: str, seq_b: str, model: ScoringModel) -> List[Column]:
    """Align two sequences and return the alignment columns

    Args:
        seq_a: First sequence (the assembly or query)
        seq_b: Second sequence (the reference or template)
        model: Scoring model

    Symbols the substitution matrix does not know are scored as its
    wildcard; the returned columns keep the original symbols.

    Returns:
        Columns (symbol of seq_a or GAP, symbol of seq_b or GAP), in order

    Raises:
        AlignmentError: If the aligner rejects the input
    """
    if not seq_a or not seq_b:
        return [(nt, GAP) for nt in seq_a] + [(GAP, nt) for nt in seq_b]

    aligner = _get_aligner(model)
    try:
        best = aligner.align(_mask_unknown_symbols(seq_a, aligner),
                             _mask_unknown_symbols(seq_b, aligner))[0]
    except (ValueError, KeyError) as e:
        raise AlignmentError(f"Alignment failed: {e}",
                             {'len_a': len(seq_a), 'len_b': len(seq_b)}) from e

    columns = _alignment_columns(best.aligned, seq_a, seq_b)
    logger.debug(f"Aligned {len(seq_a)} x {len(seq_b)} symbols in {len(columns)} columns, "
                 f"score {best.score}")
    return columns


def alignment_identity(columns: Iterable[Column]) -> Optional[float]:
    """Fraction of identical columns, relative to the shorter sequence

    Identity is the number of columns where both symbols are equal and not
    gaps, divided by the ungapped length of the shorter sequence, so
    overhangs of the longer sequence are not penalized.

    Returns:
        Identity in [0, 1], or None if the shorter sequence is empty
    """
    n_ident = len_a = len_b = 0
    for a, b in columns:
        a_gap = a == GAP
        b_gap = b == GAP
        n_ident += not (a_gap or b_gap) and a == b
        len_a += not a_gap
        len_b += not b_gap

    len_smallest = min(len_a, len_b)
    if len_smallest == 0:
        return None
    return n_ident / len_smallest
