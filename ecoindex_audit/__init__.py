"""ecoindex-audit - EcoIndex audit of web pages with Lighthouse"""

__version__ = "1.0.0"
