#!/usr/bin/env python3
"""
Tests for the flu value objects

Covers segments and proteins, coordinate ranges, indels, references,
assemblies and the validated-assembly result.
"""
import numpy as np
import pytest

from flu.exceptions import ValidationError, SegmentMismatchError
from flu.models import (
    Segment, Protein, SEGMENT_PROTEINS, SeqRange, Indel,
    ReferenceProtein, Reference, Assembly, AssemblyProtein, AlignedAssembly, check_segments
)
from flu.models.errors import ErrorAmbiguous, ErrorNoStop
from flu.tests.sequences import REFERENCE_SEQ, ORF_START, ORF_END


class TestSegmentAndProtein:
    """Segment and protein enumerations"""

    def test_parse_segment(self):
        assert Segment.parse("ha") is Segment.HA
        assert Segment.parse(" NS ") is Segment.NS
        assert str(Segment.MP) == "MP"

    def test_parse_unknown_segment(self):
        with pytest.raises(ValidationError, match="Unknown segment"):
            Segment.parse("HX")

    def test_parse_protein_by_name_or_value(self):
        assert Protein.parse("PB1-F2") is Protein.PB1F2
        assert Protein.parse("pb1f2") is Protein.PB1F2
        assert Protein.parse("PA-X") is Protein.PAX
        assert str(Protein.PAX) == "PA-X"

    def test_parse_unknown_protein(self):
        with pytest.raises(ValidationError):
            Protein.parse("M3")

    def test_every_protein_has_one_segment(self):
        listed = [p for proteins in SEGMENT_PROTEINS.values() for p in proteins]
        assert sorted(p.name for p in listed) == sorted(p.name for p in Protein)
        assert set(SEGMENT_PROTEINS) == set(Segment)

    def test_protein_segment(self):
        assert Protein.N40.segment is Segment.PB1
        assert Protein.NEP.segment is Segment.NS
        assert Protein.HA.segment is Segment.HA


class TestSeqRange:
    """Inclusive 1-based ranges"""

    def test_length_and_slice(self):
        rng = SeqRange(3, 5)
        assert rng.length == 3
        assert "ABCDEFG"[rng.to_slice()] == "CDE"
        assert str(rng) == "3-5"

    def test_empty_range(self):
        assert SeqRange(5, 4).is_empty()
        assert SeqRange(5, 4).length == 0
        assert not SeqRange(5, 5).is_empty()


class TestIndel:
    """Indel construction and messages"""

    def test_deletion_message(self):
        indel = Indel(SeqRange(11, 14), 6, True)
        assert indel.length == 4
        assert indel.message() == "Deletion of ref pos 11-14 b/w pos 6/7"

    def test_insertion_message(self):
        indel = Indel(SeqRange(20, 25), 18, False)
        assert str(indel) == "Insertion of bases 20-25 b/w ref pos 18/19"

    def test_plain_tuple_range_is_normalized(self):
        indel = Indel((2, 4), 1, True)
        assert isinstance(indel.range, SeqRange)
        assert indel == Indel(SeqRange(2, 4), 1, True)

    def test_zero_length_rejected(self):
        with pytest.raises(ValidationError, match="zero-length"):
            Indel(SeqRange(5, 4), 4, True)

    def test_to_dict(self):
        assert Indel(SeqRange(2, 4), 1, False).to_dict() == {
            'start': 2, 'end': 4, 'position': 1, 'is_deletion': False
        }


class TestReferenceProtein:
    """ORF validation of reference proteins"""

    def test_orfs_are_sorted(self):
        protein = ReferenceProtein(Protein.M2, ((715, 982), (1, 26)))
        assert protein.orfs == (SeqRange(1, 26), SeqRange(715, 982))
        assert protein.last_coding_position == 982
        assert protein.coding_length == 26 + 268

    def test_no_orfs(self):
        with pytest.raises(ValidationError, match="no ORFs"):
            ReferenceProtein(Protein.HA, ())

    def test_empty_orf(self):
        with pytest.raises(ValidationError):
            ReferenceProtein(Protein.HA, (SeqRange(10, 9),))

    def test_orf_before_sequence_start(self):
        with pytest.raises(ValidationError):
            ReferenceProtein(Protein.HA, (SeqRange(0, 9),))

    def test_overlapping_orfs(self):
        with pytest.raises(ValidationError, match="Overlapping"):
            ReferenceProtein(Protein.NEP, ((1, 30), (30, 60)))


class TestReference:
    """References and their coding sequences"""

    def test_sequence_is_upper_cased(self, ha_protein):
        reference = Reference("ref", Segment.HA, REFERENCE_SEQ.lower(), [ha_protein])
        assert reference.seq == REFERENCE_SEQ
        assert isinstance(reference.proteins, tuple)

    def test_orf_past_end(self):
        protein = ReferenceProtein(Protein.HA, ((1, 12),))
        with pytest.raises(ValidationError, match="exceeds"):
            Reference("ref", Segment.HA, "ATGAAATAA", (protein,))

    def test_coding_sequence_joins_orfs(self):
        protein = ReferenceProtein(Protein.M2, ((1, 3), (7, 9)))
        reference = Reference("ref", Segment.MP, "ATGCCCTAA", (protein,))
        assert reference.coding_sequence(protein) == "ATGTAA"

    def test_coding_sequence_of_test_reference(self, reference, ha_protein):
        cds = reference.coding_sequence(ha_protein)
        assert len(cds) == ORF_END - ORF_START + 1
        assert cds.startswith("ATG") and cds.endswith("TAA")


class TestAssembly:
    """Assemblies and significance flags"""

    def test_defaults(self):
        assembly = Assembly("a", "acgtn")
        assert assembly.seq == "ACGTN"
        assert assembly.segment is None
        assert assembly.insignificant is None
        assert assembly.n_insignificant == 0

    def test_insignificance_flags(self):
        assembly = Assembly("a", "ACGT", Segment.NP, [True, False, True, False])
        assert assembly.n_insignificant == 2
        assert assembly.insignificant.dtype == bool
        with pytest.raises(ValueError):
            assembly.insignificant[0] = False

    def test_flag_length_must_match(self):
        with pytest.raises(ValidationError):
            Assembly("a", "ACGT", None, np.zeros(3, dtype=bool))

    def test_check_segments(self, reference):
        check_segments(Assembly("a", "ACGT"), reference)
        check_segments(Assembly("a", "ACGT", Segment.HA), reference)
        with pytest.raises(SegmentMismatchError):
            check_segments(Assembly("a", "ACGT", Segment.NA), reference)


class TestAlignedAssembly:
    """Validated assembly results"""

    def test_segment_mismatch_rejected(self, reference):
        with pytest.raises(SegmentMismatchError):
            AlignedAssembly(Assembly("a", "ACGT", Segment.PB2), reference, (), None, (), ())

    def test_all_errors_and_dict(self, reference):
        protein = AssemblyProtein(Protein.HA, None, None, (ErrorNoStop(),))
        aligned = AlignedAssembly(Assembly("a", "ACGTN"), reference, (), 0.5,
                                  (protein,), (ErrorAmbiguous(1),))

        assert aligned.all_errors == [ErrorAmbiguous(1), ErrorNoStop()]

        result = aligned.to_dict()
        assert result['assembly'] == "a"
        assert result['segment'] == "HA"
        assert result['errors'][0]['kind'] == "ErrorAmbiguous"
        assert result['proteins'][0] == {
            'protein': 'HA', 'orfs': None, 'identity': None,
            'errors': [{'kind': 'ErrorNoStop', 'message': 'No stop codon'}],
        }
