"""Run quality assessment."""

from phredstat.assess.verdict import classify

__all__ = ["classify"]
