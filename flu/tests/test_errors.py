#!/usr/bin/env python3
"""
Tests for the error taxonomy in flu.models.errors
"""
import pytest

from flu.exceptions import ValidationError
from flu.models.errors import (
    SegmentError, ProteinError, InfluenzaError,
    ErrorLowIdentity, ErrorTooShort, ErrorInsignificant, ErrorAmbiguous, ErrorLowDepthBases,
    ErrorLowCoverage, ErrorAssemblyNotConverged, ErrorLinkerContamination, ErrorMissingProtein,
    ErrorFrameShift, ErrorIndelTooBig, ErrorFivePrimeDeletion, ErrorEarlyStop, ErrorLateStop,
    ErrorNoStop, ErrorCDSNotDivisible
)
from flu.models.indel import Indel, SeqRange
from flu.models.segment import Protein


class TestErrorFamilies:
    """Segment and protein error families"""

    def test_low_identity_in_both_families(self):
        error = ErrorLowIdentity(0.5)
        assert isinstance(error, SegmentError)
        assert isinstance(error, ProteinError)

    @pytest.mark.parametrize("error", [
        ErrorTooShort(10), ErrorInsignificant(1), ErrorAmbiguous(2), ErrorLowDepthBases(3),
        ErrorLowCoverage(0.5), ErrorAssemblyNotConverged(0.9), ErrorMissingProtein(Protein.M2),
    ])
    def test_segment_errors(self, error):
        assert isinstance(error, SegmentError)
        assert not isinstance(error, ProteinError)

    @pytest.mark.parametrize("error", [
        ErrorFrameShift(Indel(SeqRange(1, 2), 0, True)), ErrorNoStop(), ErrorCDSNotDivisible(4),
        ErrorEarlyStop(30, 100, 9), ErrorLateStop(300, 330, 100, 110),
    ])
    def test_protein_errors(self, error):
        assert isinstance(error, ProteinError)
        assert not isinstance(error, SegmentError)

    def test_errors_are_values(self):
        assert ErrorAmbiguous(2) == ErrorAmbiguous(2)
        assert ErrorAmbiguous(2) != ErrorInsignificant(2)
        assert len({ErrorNoStop(), ErrorNoStop()}) == 1


class TestErrorMessages:
    """Human-readable rendering"""

    def test_identity_messages(self):
        assert str(ErrorLowIdentity(0.8512)) == "Identity to reference low at 85.1 %"
        assert str(ErrorAssemblyNotConverged(0.97)) == "Assembly not converged, at 97.0 % identity"

    def test_counts_are_pluralized(self):
        assert str(ErrorTooShort(1)) == "Sequence too short at 1 base"
        assert str(ErrorTooShort(40)) == "Sequence too short at 40 bases"
        assert str(ErrorAmbiguous(3)) == "Sequence has 3 ambiguous bases"
        assert str(ErrorInsignificant(1)) == "Sequence has 1 insignificant base"

    def test_linker_contamination(self):
        assert str(ErrorLinkerContamination(12, None)) == \
            "Linker/primer contamination at ends, check first 12 bases"
        assert str(ErrorLinkerContamination(None, 1)) == \
            "Linker/primer contamination at ends, check last 1 base"
        assert "first 3 bases and last 4 bases" in str(ErrorLinkerContamination(3, 4))

    def test_missing_protein(self):
        assert str(ErrorMissingProtein(Protein.PB1F2)) == 'Missing non-auxiliary protein: "PB1-F2"'

    def test_indel_messages(self):
        indel = Indel(SeqRange(11, 14), 6, True)
        assert str(ErrorFrameShift(indel)) == "Frameshift: Deletion of ref pos 11-14 b/w pos 6/7"
        assert str(ErrorIndelTooBig(indel)) == "Indel too big: Deletion of ref pos 11-14 b/w pos 6/7"
        assert str(ErrorFivePrimeDeletion(indel)) == "Deletion of 4 bases at 5' end"

    def test_stop_messages(self):
        assert str(ErrorEarlyStop(42, 27, 10)) == \
            "Protein stops early at segment pos 42 after 10 aa, reference is 27 aa"
        assert str(ErrorLateStop(93, 99, 27, 29)) == \
            "Protein stops late at segment pos 99 after 29 aa, reference stops at 93 after 27 aa"
        assert str(ErrorNoStop()) == "No stop codon"
        assert str(ErrorCDSNotDivisible(7)) == "CDS has length 7, not divisible by 3"


class TestErrorValidation:
    """Invalid findings are rejected on construction"""

    def test_linker_contamination_needs_an_end(self):
        with pytest.raises(ValidationError):
            ErrorLinkerContamination(None, None)

    def test_divisible_cds_rejected(self):
        with pytest.raises(ValidationError, match="divisible"):
            ErrorCDSNotDivisible(9)


class TestErrorSerialization:
    """Conversion to plain dictionaries"""

    def test_kind_and_fields(self):
        assert ErrorAmbiguous(2).to_dict() == {
            'kind': 'ErrorAmbiguous', 'message': 'Sequence has 2 ambiguous bases', 'n_ambiguous': 2
        }

    def test_nested_values_are_converted(self):
        indel = Indel(SeqRange(7, 11), 6, False)
        result = ErrorFrameShift(indel).to_dict()
        assert result['indel'] == indel.to_dict()

        assert ErrorMissingProtein(Protein.NEP).to_dict()['protein'] == "NEP"

    def test_base_kind(self):
        assert isinstance(ErrorNoStop(), InfluenzaError)
        assert ErrorNoStop().kind == "ErrorNoStop"
