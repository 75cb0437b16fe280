"""Ihangire Youth: AI-assisted business brainstorming for young entrepreneurs."""

__version__ = "0.1.0"
