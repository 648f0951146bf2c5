"""
Exceptions raised while decoding font programs.
"""

from typing import Union


class FontException(Exception):
    pass


class FontSyntaxError(FontException):
    pass


class MalformedContainer(FontSyntaxError):
    pass


class InvalidFontSignature(FontSyntaxError):
    pass


class IndexOutOfRange(FontException, IndexError):
    pass


class IoFailure(FontException, IOError):
    pass


class MissingTable(FontException, KeyError):
    """A table required for decoding is not in the table directory."""

    def __init__(self, tag: str, filename: Union[str, None] = None) -> None:
        self.tag = tag
        self.filename = filename
        if filename is not None:
            msg = f"Table '{tag}' does not exist in {filename}"
        else:
            msg = f"Table '{tag}' does not exist"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])
