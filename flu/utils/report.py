#!/usr/bin/env python3
"""
Tabular summaries of validated assemblies
"""
from typing import Iterable

import pandas as pd

from flu.models.assembly import AlignedAssembly

ASSEMBLY_COLUMNS = ['assembly', 'reference', 'segment', 'identity', 'n_errors', 'errors']
PROTEIN_COLUMNS = ['assembly', 'protein', 'identity', 'orfs', 'n_errors', 'errors']


def _join_messages(errors) -> str:
    return "; ".join(str(error) for error in errors)


def assembly_table(results: Iterable[AlignedAssembly]) -> pd.DataFrame:
    """One row per assembly with its segment-level findings

    ``n_errors`` counts segment and protein errors; ``errors`` lists only
    the segment-level messages.
    """
    rows = [{
        'assembly': aligned.assembly.name,
        'reference': aligned.reference.name,
        'segment': aligned.reference.segment.value,
        'identity': aligned.identity,
        'n_errors': len(aligned.all_errors),
        'errors': _join_messages(aligned.errors),
    } for aligned in results]
    return pd.DataFrame(rows, columns=ASSEMBLY_COLUMNS)


def protein_table(results: Iterable[AlignedAssembly]) -> pd.DataFrame:
    """One row per protein of every assembly"""
    rows = []
    for aligned in results:
        for protein in aligned.proteins:
            rows.append({
                'assembly': aligned.assembly.name,
                'protein': protein.variant.value,
                'identity': protein.identity,
                'orfs': None if protein.orfs is None else ",".join(str(orf) for orf in protein.orfs),
                'n_errors': len(protein.errors),
                'errors': _join_messages(protein.errors),
            })
    return pd.DataFrame(rows, columns=PROTEIN_COLUMNS)
