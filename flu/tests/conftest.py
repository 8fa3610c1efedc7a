#!/usr/bin/env python3
"""
Shared fixtures for the flu test suite
"""
import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from flu.models.assembly import Assembly, Reference, ReferenceProtein
from flu.models.indel import SeqRange
from flu.models.segment import Segment, Protein
from flu.tests.sequences import (
    UTR5, UTR3, REFERENCE_SEQ, ORF_START, ORF_END, NA_ORF, mutate
)


@pytest.fixture(autouse=True)
def clean_flu_environment(monkeypatch):
    """Keep FLU_ overrides of the developer's shell out of the tests"""
    for key in list(os.environ):
        if key.startswith("FLU_"):
            monkeypatch.delenv(key)


@pytest.fixture
def ha_protein():
    return ReferenceProtein(Protein.HA, (SeqRange(ORF_START, ORF_END),))


@pytest.fixture
def reference(ha_protein):
    return Reference("test_HA", Segment.HA, REFERENCE_SEQ, (ha_protein,))


@pytest.fixture
def na_reference():
    orf = SeqRange(len(UTR5) + 1, len(UTR5) + len(NA_ORF))
    return Reference("test_NA", Segment.NA, UTR5 + NA_ORF + UTR3,
                     (ReferenceProtein(Protein.NA, (orf,)),))


@pytest.fixture
def identical_assembly():
    return Assembly("sample_HA", REFERENCE_SEQ, Segment.HA)


@pytest.fixture
def early_stop_assembly():
    # Codon 10 TAT (Y) becomes TAG
    return Assembly("early_stop", mutate(REFERENCE_SEQ, len(UTR5) + 30, "G"), Segment.HA)


@pytest.fixture
def reference_catalogue(tmp_path):
    """YAML catalogue with the HA reference"""
    path = tmp_path / "references.yaml"
    path.write_text(
        "references:\n"
        "  - name: test_HA\n"
        "    segment: HA\n"
        f"    sequence: {REFERENCE_SEQ}\n"
        "    proteins:\n"
        "      - protein: HA\n"
        f"        orfs: [[{ORF_START}, {ORF_END}]]\n"
    )
    return path


@pytest.fixture
def assembly_fasta(tmp_path):
    """FASTA with a clean assembly and one with an early stop"""
    path = tmp_path / "assemblies.fasta"
    path.write_text(
        ">sample_HA\n"
        f"{REFERENCE_SEQ}\n"
        ">early_stop\n"
        f"{mutate(REFERENCE_SEQ, len(UTR5) + 30, 'G')}\n"
    )
    return path
