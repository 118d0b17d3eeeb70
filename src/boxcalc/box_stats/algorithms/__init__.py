"""Algorithms behind box calc.

Pure numpy/python implementations of the individual steps: position
binning, raw-sample aggregation, the precomputed-stats path and selection
tagging.
"""
