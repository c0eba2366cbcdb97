"""Date handling for ``<lastmod>`` values and generation stamps."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

import dateutil.parser

from .exceptions import SitemapValidationError

DateLike = Union[int, float, str, date, datetime]

GENERATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def to_w3c_datetime(value: DateLike) -> str:
    """Convert *value* to ``YYYY-MM-DDTHH:MM:SS+HH:MM``.

    Integers and floats are epoch timestamps, strings are parsed with
    ``dateutil``. Naive values are taken to be local time; aware values keep
    their own offset.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str, date)):
        raise SitemapValidationError(f"Invalid date value: {value!r}")

    try:
        if isinstance(value, (int, float)):
            moment = datetime.fromtimestamp(value)
        elif isinstance(value, datetime):
            moment = value
        elif isinstance(value, date):
            moment = datetime(value.year, value.month, value.day)
        else:
            moment = dateutil.parser.parse(value)
        if moment.tzinfo is None:
            moment = moment.astimezone()
    except (ValueError, OverflowError, OSError) as e:
        raise SitemapValidationError(f"Unable to parse date {value!r}: {e}") from e

    return moment.isoformat(timespec="seconds")


def now_w3c() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def generated_at() -> str:
    """Local timestamp used in the ``Generated at`` comment."""
    return datetime.now().strftime(GENERATED_AT_FORMAT)
