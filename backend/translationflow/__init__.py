"""TranslationFlow: multilingual translation project tracking service."""

__version__ = "1.0.0"
