"""Post-processing helpers that write generated hints into documents."""

from .head import HeadInjector

__all__ = ["HeadInjector"]
