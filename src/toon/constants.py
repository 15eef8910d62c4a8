"""Constants for TOON encoding and decoding."""

# List markers
LIST_ITEM_MARKER = "-"
LIST_ITEM_PREFIX = "- "

# Structural characters
COMMA = ","
COLON = ":"
PIPE = "|"
TAB = "\t"

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"

# Literals
NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"
RESERVED_LITERALS = (NULL_LITERAL, TRUE_LITERAL, FALSE_LITERAL)

# Escape characters
BACKSLASH = "\\"
DOUBLE_QUOTE = '"'
NEWLINE = "\n"
CARRIAGE_RETURN = "\r"

# Delimiters
DELIMITERS = {
    "comma": COMMA,
    "tab": TAB,
    "pipe": PIPE,
}
DEFAULT_DELIMITER = DELIMITERS["comma"]

# Primitive arrays are always comma separated, whatever the tabular delimiter
INLINE_ARRAY_SEPARATOR = COMMA

DEFAULT_INDENT = 2
