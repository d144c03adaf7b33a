"""
Property-based tests for the decode-tree generator.

This package hosts Hypothesis strategies that build collision-free catalogs
and the test entrypoints for both the fast CI lane and the nightly fuzz job.
"""
