from __future__ import annotations


class ConvdateError(Exception):
    """Base error. ``text`` is the raw text the error is about."""

    template = "{text}"

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return self.template.format(text=self.text)


class TableError(ConvdateError):
    """The TAI-UTC table could not be built."""


class TableLineError(TableError):
    template = "Illegal leap definition: {text}"


class TableDatetimeError(TableError):
    template = "Illegal leap definition (datetime): {text}"


class TableIntegerError(TableError):
    template = "Illegal leap definition (offset): {text}"


class TableOrderError(TableError):
    template = "Leap table is not in ascending order: {text}"


class TableLoadError(TableError):
    template = "The leaps table file isn't available: {text}"


class DatetimeParseError(ConvdateError):
    template = "Illegal datetime: {text}"


class DatetimeFormatError(ConvdateError):
    template = "Illegal datetime format: {text}"


class DatetimeTooEarlyError(ConvdateError):
    template = "The datetime is too low: {text}"
