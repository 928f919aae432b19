"""
Project loaders: file selection and import resolution per language.
"""

from .base import ProjectLoader
from .python import PythonProject
from .typescript import TypeScriptProject

__all__ = ["ProjectLoader", "PythonProject", "TypeScriptProject"]
