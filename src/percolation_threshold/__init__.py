"""
Percolation Threshold - Monte Carlo estimation of the site percolation threshold.

This package provides tools for:
- Union-find connectivity with virtual top/bottom sentinels
- N-by-N site percolation grids
- Repeated randomized trials and threshold statistics
- Chunked batch runs for spreading trials over worker processes
"""

__version__ = "1.0.0"
