"""
Command-line interface for the flu toolkit.

Commands:
    validate    Validate assembled segments against references
    cleavage    Classify the HA0 cleavage site of HA proteins
"""
