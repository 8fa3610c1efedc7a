#!/usr/bin/env python3
"""
Loading of curated references from a YAML catalogue

    references:
      - name: H1N1_HA
        segment: HA
        sequence: ATGAAGGCAATACTAG...   # or sequence_file: ha.fasta
        proteins:
          - protein: HA
            orfs: [[1, 1701]]

ORFs are 1-based inclusive ranges. A relative sequence_file is resolved
against the directory of the catalogue and its first record is used.
"""
import logging
import os
from typing import Any, Dict, List

import yaml
from Bio import SeqIO

from flu.exceptions import FileOperationError, ValidationError
from flu.models.assembly import Reference, ReferenceProtein
from flu.models.indel import SeqRange
from flu.models.segment import Segment, Protein

logger = logging.getLogger("flu.utils.reference_loader")


def _read_sequence_file(path: str) -> str:
    if not os.path.exists(path):
        raise FileOperationError(f"Reference sequence file not found: {path}", {'path': path})
    record = next(SeqIO.parse(path, "fasta"), None)
    if record is None:
        raise ValidationError(f"No FASTA record in {path}", {'path': path})
    return str(record.seq)


def _parse_protein(entry: Dict[str, Any], segment: Segment, reference_name: str) -> ReferenceProtein:
    try:
        protein = Protein.parse(str(entry['protein']))
        orfs = [SeqRange(int(start), int(end)) for start, end in entry['orfs']]
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed protein entry in reference {reference_name}: {entry!r}",
                              {'reference': reference_name}) from e

    if protein.segment is not segment:
        raise ValidationError(f"Protein {protein} is not encoded by segment {segment}",
                              {'reference': reference_name})
    return ReferenceProtein(protein, tuple(orfs))


def parse_reference(entry: Dict[str, Any], base_dir: str = ".") -> Reference:
    """Build a Reference from one catalogue entry

    Raises:
        ValidationError: If the entry is malformed or its ORFs are invalid
        FileOperationError: If a referenced sequence file is missing
    """
    if not isinstance(entry, dict):
        raise ValidationError(f"Reference entry must be a mapping, got {entry!r}")

    name = str(entry.get('name', ''))
    if not name:
        raise ValidationError("Reference entry without a name")

    if 'segment' not in entry:
        raise ValidationError(f"Reference {name} has no segment", {'reference': name})
    segment = Segment.parse(str(entry['segment']))

    if 'sequence' in entry:
        seq = "".join(str(entry['sequence']).split())
    elif 'sequence_file' in entry:
        seq = _read_sequence_file(os.path.join(base_dir, str(entry['sequence_file'])))
    else:
        raise ValidationError(f"Reference {name} has neither sequence nor sequence_file",
                              {'reference': name})

    proteins = [_parse_protein(p, segment, name) for p in entry.get('proteins') or []]
    return Reference(name, segment, seq, tuple(proteins))


def load_references(path: str) -> List[Reference]:
    """Load every reference of a YAML catalogue

    Raises:
        FileOperationError: If the catalogue cannot be read
        ValidationError: If the catalogue is malformed
    """
    try:
        with open(path, 'r') as f:
            document = yaml.safe_load(f) or {}
    except OSError as e:
        raise FileOperationError(f"Cannot read reference catalogue {path}: {e}", {'path': path}) from e
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in reference catalogue {path}: {e}", {'path': path}) from e

    entries = document.get('references') if isinstance(document, dict) else None
    if not isinstance(entries, list):
        raise ValidationError(f"Reference catalogue {path} needs a 'references' list", {'path': path})

    base_dir = os.path.dirname(os.path.abspath(path))
    references = [parse_reference(entry, base_dir) for entry in entries]
    logger.info(f"Loaded {len(references)} references from {path}")
    return references
