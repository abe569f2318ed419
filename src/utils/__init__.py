"""Result export helpers."""

from .export import ResultExporter

__all__ = ['ResultExporter']
