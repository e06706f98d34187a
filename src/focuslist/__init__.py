# src/focuslist/__init__.py

"""Personal task tracker: today list, backlog, recurring templates, #tags and CSV backup."""

__version__ = "0.3.0"
