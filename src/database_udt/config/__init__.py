"""
Configuration files for custom type mappings.
"""
