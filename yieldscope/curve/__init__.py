"""
Treasury par-yield curve: record schema, normalization and shape classification.
"""
