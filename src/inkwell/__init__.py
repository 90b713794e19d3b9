"""Inkwell: markdown editing sessions with AI-generated drafts."""

__version__ = "0.1.0"
