"""
Deterministic calculation engine.

Pure Python math. Given a volume or wall/plaster dimensions, a mix ratio
and a material catalog, produce purchase quantities and costs.
"""
