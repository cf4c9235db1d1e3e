from ygodeck.parsers.ydk import (
    ParseErrorCode,
    UnknownIdentifierError,
    YdkError,
    YdkParseError,
    YdkReaderError,
    dumps,
    load,
    load_file,
    parse_ydk,
    save,
)

__all__ = [
    "ParseErrorCode",
    "UnknownIdentifierError",
    "YdkError",
    "YdkParseError",
    "YdkReaderError",
    "dumps",
    "load",
    "load_file",
    "parse_ydk",
    "save",
]
