"""Cozy Kitchen - console demo for a Semantic Kernel Handlebars planner"""

__version__ = "0.1.0"
