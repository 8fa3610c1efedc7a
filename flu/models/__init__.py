#!/usr/bin/env python3
"""
Value objects for references, assemblies, indels and findings
"""
from .segment import Segment, Protein, SEGMENT_PROTEINS
from .indel import SeqRange, Indel
from .assembly import (
    ReferenceProtein, Reference, Assembly, AssemblyProtein, AlignedAssembly, check_segments
)

__all__ = [
    'Segment', 'Protein', 'SEGMENT_PROTEINS', 'SeqRange', 'Indel',
    'ReferenceProtein', 'Reference', 'Assembly', 'AssemblyProtein', 'AlignedAssembly',
    'check_segments',
]
