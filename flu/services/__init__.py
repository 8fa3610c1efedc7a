#!/usr/bin/env python3
"""
Assembly validation and cleavage site services
"""
from .assembly_validator import AssemblyValidator, translate_proteins
from .cleavage import CleavageSiteAnalyzer, CleavageSite, Pathogenicity, ha0_cleavage
from .protein_scanner import compare_proteins_in_alignment, build_coding_mask

__all__ = [
    'AssemblyValidator', 'translate_proteins',
    'CleavageSiteAnalyzer', 'CleavageSite', 'Pathogenicity', 'ha0_cleavage',
    'compare_proteins_in_alignment', 'build_coding_mask',
]
