"""postmap - ASCII density maps of postal code coordinates"""

__version__ = "0.1.0"
__author__ = "Ryan Robitaille"
__description__ = "Renders postal code coordinates of a country as an ASCII density map in the terminal"

from .map_renderer import render_map
from .extractor import extract_coordinates

# Import main entry point
from .main import main

__all__ = ['main', 'render_map', 'extract_coordinates']
