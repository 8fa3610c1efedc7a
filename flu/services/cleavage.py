#!/usr/bin/env python3
"""
HA0 cleavage site detection

Highly pathogenic avian influenza carries several basic residues (R/K)
upstream of the HA0 cleavage site. The site is found by aligning the HA
protein to a conserved template and reading the residues aligned to the
template's cleavage window.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from flu.utils.alignment import GAP, CLEAVAGE_ALN_MODEL, ScoringModel, align

logger = logging.getLogger("flu.services.cleavage")

CLEAVAGE_TEMPLATE = "LATGLRNSPLREKRRKRGLFGAIAGFIEGGW"
# 1-based template positions holding the cleavage site
CLEAVAGE_WINDOW = (9, 20)
MIN_SITE_LENGTH = 9
CLEAVING_MOTIF = re.compile(r"[RK]GLF")
BASIC_RESIDUES = frozenset("RK")


class Pathogenicity(Enum):
    LOW = "low"
    HIGH = "high"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class CleavageSite:
    """A located cleavage site

    ``motif`` is None when no site was found, and then so is ``pathogenicity``.
    """
    motif: Optional[str]
    pathogenicity: Optional[Pathogenicity]

    @property
    def found(self) -> bool:
        return self.motif is not None


def classify_leading_residues(leading: str) -> Pathogenicity:
    """Classify from the 5 residues before the cleaving R/K

    4 or 5 basic residues is highly pathogenic, 3 cannot be decided, fewer
    is low pathogenic.
    """
    n_basic = sum(1 for aa in leading if aa in BASIC_RESIDUES)
    if n_basic < 3:
        return Pathogenicity.LOW
    if n_basic == 3:
        return Pathogenicity.INDETERMINATE
    return Pathogenicity.HIGH


class CleavageSiteAnalyzer:
    """Locates the HA0 cleavage site and classifies pathogenicity"""

    def __init__(self, model: ScoringModel = CLEAVAGE_ALN_MODEL):
        self.model = model

    def find_motif(self, protein: str) -> Optional[Tuple[str, int]]:
        """Locate the cleavage motif

        Returns:
            (site, index of the cleaving R/K in site), or None if the site
            does not end in [RK]GLF or is too short
        """
        first, last = CLEAVAGE_WINDOW
        site = []
        template_pos = 0
        for residue, template_residue in align(protein.upper(), CLEAVAGE_TEMPLATE, self.model):
            if template_residue != GAP:
                template_pos += 1
            if first <= template_pos <= last and residue != GAP:
                site.append(residue)
        motif = "".join(site)

        match = CLEAVING_MOTIF.search(motif)
        if match is None or match.end() != len(motif) or len(motif) < MIN_SITE_LENGTH:
            logger.debug(f"No cleavage motif in aligned window {motif!r}")
            return None
        return motif, match.start()

    def analyze(self, protein: str) -> CleavageSite:
        """Find the cleavage site of an HA protein and classify it"""
        located = self.find_motif(protein)
        if located is None:
            return CleavageSite(None, None)
        motif, pos = located
        pathogenicity = classify_leading_residues(motif[pos - 5:pos])
        logger.debug(f"Cleavage motif {motif}: {pathogenicity.value} pathogenicity")
        return CleavageSite(motif, pathogenicity)


def ha0_cleavage(protein: str) -> Tuple[Optional[str], Optional[Pathogenicity]]:
    """Return (site, pathogenicity) for an HA protein

    >>> ha0_cleavage("LATGLRNSPLREKRRKRGLFGAIAGFIEGGW")
    ('PLREKRRKRGLF', <Pathogenicity.HIGH: 'high'>)
    """
    site = CleavageSiteAnalyzer().analyze(protein)
    return site.motif, site.pathogenicity
