"""International Women's Day tribute backend: JSON-file collections served over HTTP."""

__version__ = "1.0.0"
