from .classify import main

__all__ = ["main"]
