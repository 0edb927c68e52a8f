"""
VentCalc - natural ventilation sizing for hazardous-area enclosures
"""

__version__ = "1.0.0"
