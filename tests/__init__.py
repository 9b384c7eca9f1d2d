"""
Alert Graph Test Suite

TEST AXIOMS:
=============
1. Determinism: same network = same layout
2. Totality: every node is positioned, every failure is a value
3. Isolation: filtering and selection never mutate the model
"""
