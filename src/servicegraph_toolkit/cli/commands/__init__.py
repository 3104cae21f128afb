"""
CLI commands: convert and summary.
"""
