"""
Param Engine

Provider-agnostic parameter constraint and normalization engine for AI
chat/image/video providers: schema lookup, defaults, validation, presets and
diffing over plain parameter maps.
"""

__version__ = "0.1.0"

try:
    import importlib.metadata

    __version__ = importlib.metadata.version("param-engine")
except (importlib.metadata.PackageNotFoundError, ImportError):
    # Fallback for development mode
    pass

__all__ = ["__version__"]
