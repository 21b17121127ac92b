"""
Tests for binary branching trees.

- test_models.py: Leaf / Branch data model
- test_generator.py: Branching process, forced root, depth ceiling
- test_measurement.py: Leaf/branch/node counts and depth
- test_encoding.py: Per-generation structural encoding and decoding
"""
