"""
Tests for the 1D advection solver.

Run tests with pytest:
    pytest advdiff/tests/ -v

Or run individual test files:
    pytest advdiff/tests/test_reconstruction.py -v
    pytest advdiff/tests/test_solver.py -v
"""
