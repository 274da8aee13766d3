"""Schema model, default encodings and test-vector code generation for Molecule."""

__version__ = "0.8.0"