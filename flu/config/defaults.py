#!/usr/bin/env python3
"""
Default configuration values for the flu toolkit

The alignment sections reproduce the fixed scoring models of
flu.utils.alignment; changing them here changes what the CLI aligns with.
"""

DEFAULT_CONFIG = {
    'alignment': {
        'dna': {
            'matrix': 'NUC.4.4',
            'gap_open': -25,
            'gap_extend': -2,
        },
        'protein': {
            'matrix': 'BLOSUM62',
            'gap_open': -10,
            'gap_extend': -2,
        },
    },
    'validation': {
        'min_identity': 0.9,
        'check_significance': True,
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
}
