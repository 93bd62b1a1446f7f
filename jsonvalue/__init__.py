"""JSON values with ordered objects, typed coercion and configurable serialization."""

__version__ = "0.1.0"
__all__ = ["serialize", "value", "convert", "iterator"]