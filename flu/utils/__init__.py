"""
Sequence, alignment and file helpers
"""
