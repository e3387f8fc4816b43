"""Exceptions raised while ingesting sequencing records."""

from __future__ import annotations


class RecordDecodeError(ValueError):
    """A single record's quality data could not be decoded.

    Unlike precondition failures, this is recoverable: the record is skipped
    and the run is flagged as containing unreadable reads.
    """
