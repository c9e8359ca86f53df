from .console import ConsoleIO

__all__ = ['ConsoleIO']
