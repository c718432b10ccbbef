"""CML (Context Mapper Language) domain models to PHP class generator."""

__version__ = "0.1.0"
