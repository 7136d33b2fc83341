"""
Test Helper Constants and Builders

Known-good identifiers, checked independently of the code under test, plus
a small builder for ID series.
"""

from datetime import datetime, timedelta, timezone

from tuid.model import TUID

# 91Mq07yx9IxHCi5Y was minted at this instant with this entropy
EXAMPLE_ID = "91Mq07yx9IxHCi5Y"
EXAMPLE_TIMESTAMP = "2021-03-08T05:54:09.208207Z"
EXAMPLE_EPOCH_NANOS = 1_615_182_849_208_207_000
EXAMPLE_ENTROPY = 1_559_656_024

# Boundary ids of the default window
EXPECTED_MIN_ID = "5Hr02eJHAfTt1tTM"  # 2000-01-01T00:00:00Z
EXPECTED_MAX_ID = "MuklDY5bgW1s9Ev2"  # 2100-01-01T00:00:00Z

# Decodes fine, but its embedded year is past 9999
OVERSIZED_ID = "z" * 17


def first_ids_every(step: timedelta, count: int, start: datetime | None = None) -> list[TUID]:
    """
    Builder for a chronological series of zero-entropy TUIDs

    Args:
        step: Gap between consecutive timestamps
        count: Number of TUIDs
        start: First timestamp (defaults to 2000-01-01 UTC)
    """
    start = start or datetime(2000, 1, 1, tzinfo=timezone.utc)
    return [TUID.first(start + step * i) for i in range(count)]
