#!/usr/bin/env python3
"""
FASTA input for the flu toolkit

Assemblers write insignificantly called bases in lower case; that casing is
turned into the per-base insignificance flags of an Assembly.
"""
import logging
import os
from typing import Iterator, List, Optional, Tuple

import numpy as np
from Bio import SeqIO
from Bio.SeqRecord import SeqRecord

from flu.exceptions import FileOperationError
from flu.models.assembly import Assembly
from flu.models.segment import Segment

logger = logging.getLogger("flu.utils.fasta")


def assembly_from_record(record: SeqRecord,
                         segment: Optional[Segment] = None,
                         check_significance: bool = True) -> Assembly:
    """Create an Assembly from a FASTA record

    Args:
        record: Biopython record, sequence case preserved
        segment: Known segment, or None if unknown
        check_significance: Whether lower-case bases mark insignificance

    Returns:
        The assembly; its insignificance flags are None unless some base
        is lower case and check_significance is set
    """
    raw = str(record.seq)
    insignificant = None
    if check_significance:
        flags = np.fromiter((c.islower() for c in raw), dtype=bool, count=len(raw))
        if flags.any():
            insignificant = flags

    name = record.description or record.id or ""
    return Assembly(name, raw, segment, insignificant)


def _open_fasta(path: str):
    if not os.path.exists(path):
        raise FileOperationError(f"FASTA file not found: {path}", {'path': path})
    return SeqIO.parse(path, "fasta")


def read_assemblies(path: str,
                    segment: Optional[Segment] = None,
                    check_significance: bool = True) -> Iterator[Assembly]:
    """Read every record of a FASTA file as an Assembly

    Raises:
        FileOperationError: If the file does not exist
    """
    count = 0
    for record in _open_fasta(path):
        count += 1
        yield assembly_from_record(record, segment, check_significance)
    logger.debug(f"Read {count} assemblies from {path}")


def read_protein_sequences(path: str) -> List[Tuple[str, str]]:
    """Read (name, upper-case amino acid sequence) pairs from a FASTA file

    Raises:
        FileOperationError: If the file does not exist
    """
    return [(record.description or record.id, str(record.seq).upper())
            for record in _open_fasta(path)]
