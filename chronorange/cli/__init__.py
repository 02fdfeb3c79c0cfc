"""
Command-line wrapper around the temporal engine.
"""
