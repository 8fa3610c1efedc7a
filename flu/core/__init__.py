"""
Core infrastructure shared by the flu toolkit
"""
