import re
import logging
from pathlib import Path
from string import hexdigits
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from utils.exceptions import ConfigurationError
from utils.error_handling import handle_errors
from utils import constants

ConfigMap = Mapping[str, str]

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}


class MalformedLineError(ValueError):
    """A single logical line could not be parsed."""
    pass


def _ends_with_continuation(line: str) -> bool:
    """True when the line ends with an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip('\\'))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    """
    Join continuation lines and drop comments/blank lines.

    Yields:
        (line_number, logical_line) where line_number is the 1-based number
        of the first physical line.
    """
    lines = _LINE_BREAK.split(text)
    i = 0
    while i < len(lines):
        line_number = i + 1
        buf = lines[i].lstrip(_WHITESPACE)
        i += 1

        if not buf or buf[0] in '#!':
            continue

        while _ends_with_continuation(buf) and i < len(lines):
            buf = buf[:-1] + lines[i].lstrip(_WHITESPACE)
            i += 1

        # A trailing backslash on the last line has nothing to continue onto.
        if _ends_with_continuation(buf):
            buf = buf[:-1]

        yield line_number, buf


def _unescape(raw: str) -> str:
    """Decode backslash escapes, including \\uXXXX."""
    out = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c != '\\':
            out.append(c)
            i += 1
            continue

        i += 1
        if i >= len(raw):
            break
        c = raw[i]
        if c == 'u':
            digits = raw[i + 1:i + 5]
            if len(digits) != 4 or not all(d in hexdigits for d in digits):
                raise MalformedLineError(f"Malformed \\uxxxx encoding: '\\u{digits}'")
            out.append(chr(int(digits, 16)))
            i += 5
        else:
            out.append(_ESCAPES.get(c, c))
            i += 1
    return ''.join(out)


def _split_entry(line: str) -> Tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    key_end = len(line)
    value_start = len(line)
    whitespace_separated = False
    escaped = False

    for idx, c in enumerate(line):
        if escaped:
            escaped = False
        elif c == '\\':
            escaped = True
        elif c in _SEPARATORS:
            key_end, value_start = idx, idx + 1
            break
        elif c in _WHITESPACE:
            key_end, value_start = idx, idx
            whitespace_separated = True
            break

    rest = line[value_start:].lstrip(_WHITESPACE)
    if whitespace_separated and rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)

    # Trim trailing whitespace, keeping a final escaped space.
    trimmed = rest.rstrip(_WHITESPACE)
    if len(trimmed) < len(rest) and _ends_with_continuation(trimmed):
        trimmed = rest[:len(trimmed) + 1]

    return line[:key_end], trimmed


def parse_properties(text: str, logger: Optional[logging.Logger] = None) -> Dict[str, str]:
    """
    Parse properties-format text into a dictionary.

    Supports '#'/'!' comments, '=', ':' or whitespace separators, backslash
    line continuation and the standard escapes. Duplicate keys: last one wins.
    Lines with an empty key or a broken \\u escape are skipped with a warning.

    Args:
        text: Full file content.
        logger: Optional logger for malformed-line warnings.

    Returns:
        Dict[str, str]: Parsed key/value pairs.
    """
    logger = logger or logging.getLogger("properties_loader")
    entries: Dict[str, str] = {}

    for line_number, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        if not raw_key:
            logger.warning(f"Skipping malformed properties line {line_number}: missing key")
            continue
        try:
            key = _unescape(raw_key)
            value = _unescape(raw_value)
        except MalformedLineError as e:
            logger.warning(f"Skipping malformed properties line {line_number}: {e}")
            continue
        entries[key] = value

    return entries


class PropertiesLoader:
    """
    Loads an optional properties file into an immutable ConfigMap.
    """

    def __init__(self, encoding: str = constants.DEFAULT_ENCODING,
                 logger: Optional[logging.Logger] = None):
        self.encoding = encoding
        self.logger = logger or logging.getLogger("properties_loader")

    @handle_errors("Properties load")
    def load(self, path: Union[str, Path]) -> ConfigMap:
        """
        Load the file at `path`.

        Returns:
            ConfigMap: Read-only mapping; empty when the file does not exist.

        Raises:
            ConfigurationError: If the file exists but cannot be read or decoded.
        """
        path = Path(path)
        if not path.is_file():
            self.logger.debug(f"Properties file not found at {path}; using empty configuration.")
            return MappingProxyType({})

        try:
            with open(path, 'r', encoding=self.encoding) as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Cannot decode {path} as {self.encoding}: {str(e)}") from e

        # Editors on Windows often save a byte order mark.
        if text.startswith("\ufeff"):
            text = text[1:]

        entries = parse_properties(text, logger=self.logger)
        self.logger.info(f"Loaded {len(entries)} properties from {path}")
        return MappingProxyType(entries)


def load_properties(path: Union[str, Path], encoding: str = constants.DEFAULT_ENCODING) -> ConfigMap:
    """Shortcut for PropertiesLoader(encoding).load(path)."""
    return PropertiesLoader(encoding=encoding).load(path)
