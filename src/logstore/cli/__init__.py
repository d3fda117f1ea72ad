"""
Command line interface for logstore.
"""
