"""
Command-line interface for Serval.
"""
