#!/usr/bin/env python3
"""
Influenza A genome segments and the proteins they encode
"""
from enum import Enum
from typing import Dict, Tuple

from flu.exceptions import ValidationError


class Segment(Enum):
    """The eight genome segments of influenza A"""
    PB2 = "PB2"
    PB1 = "PB1"
    PA = "PA"
    HA = "HA"
    NP = "NP"
    NA = "NA"
    MP = "MP"
    NS = "NS"

    @classmethod
    def parse(cls, name: str) -> 'Segment':
        """Parse a segment name, case-insensitively

        Raises:
            ValidationError: If the name is not a segment
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValidationError(f"Unknown segment: {name!r}") from None

    def __str__(self) -> str:
        return self.value


class Protein(Enum):
    """Proteins encoded by the influenza A segments"""
    PB2 = "PB2"
    PB1 = "PB1"
    PB1F2 = "PB1-F2"
    N40 = "N40"
    PA = "PA"
    PAX = "PA-X"
    HA = "HA"
    NP = "NP"
    NA = "NA"
    M1 = "M1"
    M2 = "M2"
    NS1 = "NS1"
    NEP = "NEP"

    @classmethod
    def parse(cls, name: str) -> 'Protein':
        """Parse a protein by member name or display value ("PB1-F2", "PB1F2")

        Raises:
            ValidationError: If the name is not a protein
        """
        normalized = name.strip().upper()
        for protein in cls:
            if normalized in (protein.name, protein.value):
                return protein
        raise ValidationError(f"Unknown protein: {name!r}")

    @property
    def segment(self) -> Segment:
        """The segment that encodes this protein"""
        return _PROTEIN_SEGMENT[self]

    def __str__(self) -> str:
        return self.value


SEGMENT_PROTEINS: Dict[Segment, Tuple[Protein, ...]] = {
    Segment.PB2: (Protein.PB2,),
    Segment.PB1: (Protein.PB1, Protein.PB1F2, Protein.N40),
    Segment.PA: (Protein.PA, Protein.PAX),
    Segment.HA: (Protein.HA,),
    Segment.NP: (Protein.NP,),
    Segment.NA: (Protein.NA,),
    Segment.MP: (Protein.M1, Protein.M2),
    Segment.NS: (Protein.NS1, Protein.NEP),
}

_PROTEIN_SEGMENT = {
    protein: segment
    for segment, proteins in SEGMENT_PROTEINS.items()
    for protein in proteins
}
