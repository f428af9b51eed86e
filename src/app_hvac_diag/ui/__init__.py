"""Console user interface for cycle diagnostics"""
