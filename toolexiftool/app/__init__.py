"""
Viewer state and key handling, independent of the GUI toolkit
"""

from .controller import App, Clipboard
from .state import MainInput, MainState, Screen

__all__ = ['App', 'Clipboard', 'MainInput', 'MainState', 'Screen']
