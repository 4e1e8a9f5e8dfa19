"""CLI package for BookBuddy"""
from .main import cli

__all__ = ['cli']
