"""Dados de referência do intake."""

from config.reference.loader import IntakeReferenceData, load_reference_data

__all__ = [
    "IntakeReferenceData",
    "load_reference_data",
]
