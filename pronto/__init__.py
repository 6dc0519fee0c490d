"""Pronto - deploy a Compose database from your terminal"""

__version__ = "1.0.0"
