from django.utils.dateparse import parse_date, parse_datetime


def parse_iso_date(value):
    """
    Parse `YYYY-MM-DD` or a full ISO 8601 datetime such as `2025-01-31T00:00:00.000Z`.

    Datetimes keep their calendar date as written. Returns None when the value
    is not a valid ISO 8601 date.
    """
    value = (value or '').strip()
    try:
        return parse_date(value) or _date_part(parse_datetime(value))
    except ValueError:
        return None


def _date_part(moment):
    return moment.date() if moment is not None else None
