"""
Command line interface to inspect notes through the tree cache.
"""
