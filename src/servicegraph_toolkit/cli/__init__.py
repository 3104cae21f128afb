"""
Command line interface for the service graph toolkit.
"""
