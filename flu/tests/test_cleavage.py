#!/usr/bin/env python3
"""
Tests for HA0 cleavage site detection
"""
import pytest

from flu.services.cleavage import (
    CLEAVAGE_TEMPLATE, CleavageSite, CleavageSiteAnalyzer, Pathogenicity,
    classify_leading_residues, ha0_cleavage
)
from flu.tests.sequences import HA_NTERM, HA_CTERM, PROTEIN_SEQ


def with_site(site: str) -> str:
    """Template with residues 9-20 replaced by site"""
    return CLEAVAGE_TEMPLATE[:8] + site + CLEAVAGE_TEMPLATE[20:]


class TestClassification:
    """Pathogenicity from the residues before the cleaving R/K"""

    @pytest.mark.parametrize("leading,expected", [
        ("EKRRK", Pathogenicity.HIGH),
        ("RRRKK", Pathogenicity.HIGH),
        ("EKRRQ", Pathogenicity.INDETERMINATE),
        ("ESGTR", Pathogenicity.LOW),
        ("ESGTQ", Pathogenicity.LOW),
    ])
    def test_classify(self, leading, expected):
        assert classify_leading_residues(leading) is expected


class TestCleavageSiteAnalyzer:
    """Locating the cleavage site by alignment to the template"""

    @pytest.fixture
    def analyzer(self):
        return CleavageSiteAnalyzer()

    def test_template_is_highly_pathogenic(self, analyzer):
        assert analyzer.find_motif(CLEAVAGE_TEMPLATE) == ("PLREKRRKRGLF", 8)
        site = analyzer.analyze(CLEAVAGE_TEMPLATE)
        assert site == CleavageSite("PLREKRRKRGLF", Pathogenicity.HIGH)
        assert site.found

    def test_site_within_full_protein(self, analyzer):
        protein = HA_NTERM + CLEAVAGE_TEMPLATE + HA_CTERM
        assert analyzer.analyze(protein) == CleavageSite("PLREKRRKRGLF", Pathogenicity.HIGH)

    def test_lower_case_protein(self, analyzer):
        assert analyzer.analyze(CLEAVAGE_TEMPLATE.lower()).pathogenicity is Pathogenicity.HIGH

    def test_low_pathogenic_site(self, analyzer):
        site = analyzer.analyze(with_site("PLRESGTQRGLF"))
        assert site == CleavageSite("PLRESGTQRGLF", Pathogenicity.LOW)

    def test_indeterminate_site(self, analyzer):
        site = analyzer.analyze(with_site("PLREKRRQRGLF"))
        assert site == CleavageSite("PLREKRRQRGLF", Pathogenicity.INDETERMINATE)

    def test_extended_basic_stretch(self, analyzer):
        site = analyzer.analyze(with_site("PQRERRRKKRGLF"))
        assert site.motif.endswith("RGLF")
        assert site.pathogenicity is Pathogenicity.HIGH

    def test_no_site(self, analyzer):
        site = analyzer.analyze(PROTEIN_SEQ)
        assert site == CleavageSite(None, None)
        assert not site.found

    def test_empty_protein(self, analyzer):
        assert analyzer.find_motif("") is None

    def test_residues_outside_matrix(self, analyzer):
        site = analyzer.analyze("MEKJVLLPLREKRRKRGLFGAIAGFIEGGW")
        assert site == CleavageSite("PLREKRRKRGLF", Pathogenicity.HIGH)

        protein = HA_NTERM.replace("K", "U").replace("V", "O") + CLEAVAGE_TEMPLATE
        assert analyzer.analyze(protein).pathogenicity is Pathogenicity.HIGH


def test_ha0_cleavage():
    assert ha0_cleavage(CLEAVAGE_TEMPLATE) == ("PLREKRRKRGLF", Pathogenicity.HIGH)
    assert ha0_cleavage(PROTEIN_SEQ) == (None, None)
