"""Core module for the circlefeed application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
