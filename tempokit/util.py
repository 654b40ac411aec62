"""Millisecond multipliers shared by the duration and sleep helpers.

``parse_duration`` maps its unit suffixes onto these values and ``sleep``
takes its delay in the same unit.
"""

MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000  # not a parse_duration unit
