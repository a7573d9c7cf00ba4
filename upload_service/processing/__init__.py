"""
Optional processing stages of the upload pipeline (compression, virus scanning).
"""
