#!/usr/bin/env python3
"""
flu - Influenza segment assembly validation

Aligns assembled influenza segments to curated references, checks every
reference protein for frame shifts, oversized indels and misplaced stops,
and classifies the HA0 cleavage site.
"""

__version__ = '0.1.0'
__license__ = 'MIT'

from .exceptions import FluError
from .error_handlers import handle_exceptions

__all__ = ['FluError', 'handle_exceptions']
