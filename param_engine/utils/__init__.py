from .values import is_defined, same_value

__all__ = ["is_defined", "same_value"]
