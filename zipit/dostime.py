#
# MS-DOS date and time packing used by zip headers
#
import datetime
from collections import namedtuple

from . import consts


__all__ = ("FileDateTime", "to_dos_fields")


class FileDateTime(namedtuple("FileDateTime",
                              ("year", "month", "day",
                               "hour", "minute", "second"))):
    """
    Timezone-less date and time stored alongside a file in the archive.

    Use FileDateTime.ZERO when the value is insignificant (1980-01-01
    00:00:00), FileDateTime.custom() for an explicit value and
    FileDateTime.now() for the local time of the system.
    """
    __slots__ = ()

    @classmethod
    def custom(cls, year, month, day, hour=0, minute=0, second=0):
        return cls(year, month, day, hour, minute, second)

    @classmethod
    def now(cls):
        return cls.from_datetime(datetime.datetime.now())

    @classmethod
    def from_datetime(cls, dt):
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def ms_dos(self):
        """
        Return packed (date, time) fields.
        Nothing is validated, components overflowing their bit range
        spill into the neighbouring field and the result is cut to 16 bits.
        """
        year, month, day, hour, minute, second = (
            v & consts.UINT16_MAX for v in self)
        dosdate = (day | month << 5 | max(year - 1980, 0) << 9) \
            & consts.UINT16_MAX
        dostime = (second // 2 | minute << 5 | hour << 11) \
            & consts.UINT16_MAX
        return dosdate, dostime


FileDateTime.ZERO = FileDateTime(1980, 1, 1, 0, 0, 0)


def to_dos_fields(value):
    """
    Pack FileDateTime, datetime.datetime or None (same as ZERO)
    into (date, time)
    """
    if value is None:
        value = FileDateTime.ZERO
    elif isinstance(value, datetime.datetime):
        value = FileDateTime.from_datetime(value)
    return value.ms_dos()
