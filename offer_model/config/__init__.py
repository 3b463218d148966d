"""
Config package: offer input models and the YAML loaders that build them.
"""
