import re

# Comments: // to end of line, or /* ... */ (non-greedy, not nested)
PATTERN_COMMENT = re.compile(r'(//[^\n]*)|(/\*[^*]*\*+(?:[^/*][^*]*\*+)*/)')

# Packed attribute directly before the struct keyword:
# #pragma pack(n) or __attribute__((packed))
_PACKED_PREFIX = r'(?:#pragma\s+pack\s*\(\s*\d*\s*\)|__attribute__\s*\(\(\s*packed\s*\)\))'

# Declaration shapes. Bodies are [^}]* so a nested '}' ends the match.
# Captures: tag (optional), alias
PATTERN_TYPEDEF_STRUCT = re.compile(
    r'typedef\s+struct\s*(?:(?P<tag>\w+)\s*)?\{[^}]*\}\s*(?P<alias>\w+)\s*;',
    re.DOTALL
)

# Captures: tag
PATTERN_TAGGED_STRUCT = re.compile(
    r'struct\s+(?P<tag>\w+)\s*\{[^}]*\}',
    re.DOTALL
)

# Captures: tag
PATTERN_PACKED_STRUCT = re.compile(
    _PACKED_PREFIX + r'\s*struct\s+(?P<tag>\w+)\s*\{[^}]*\}',
    re.DOTALL
)

# Captures: tag
PATTERN_FORWARD_STRUCT = re.compile(
    r'struct\s+(?P<tag>\w+)\s*;',
    re.DOTALL
)

# Catch-all over the four shapes, used to find candidates in text order.
PATTERN_BROAD_STRUCT = re.compile(
    r'(typedef\s+struct\s*(?:\w+\s*)?\{[^}]*\}\s*\w+\s*;)|'
    r'(struct\s+\w+\s*\{[^}]*\})|'
    r'(' + _PACKED_PREFIX + r'\s*struct\s+\w+\s*\{[^}]*\})|'
    r'(struct\s+\w+\s*;)',
    re.DOTALL
)

# Value-level usage: [struct] Name *var[size]; / [struct] Name var, / [struct] Name var = {
# Captures: name (first form), name (initializer form)
PATTERN_STRUCT_USAGE = re.compile(
    r'(?:struct\s+)?(\w+)\s*(?:\*|\s+)\w+\s*(?:\[\d*\])?\s*[;,]|'
    r'(?:struct\s+)?(\w+)\s*\w+\s*=\s*\{'
)

# Field statement inside a struct body (matched per ';'-terminated statement):
# [struct] Type [*] name [repetition]
# Captures: struct, type, pointer, name, repetition
PATTERN_STRUCT_FIELD = re.compile(
    r'\s*(?:(?P<struct>struct)\s+)?'
    r'(?P<type>(?:(?:const|volatile|unsigned|signed)\s+)*\w+)'
    r'(?:\s*(?P<pointer>\*)\s*|\s+)'
    r'(?P<name>\w+)\s*'
    r'(?:\[\s*(?P<repetition>[^\[\]]*?)\s*\])?\s*'
)

# Preprocessor line (skipped inside struct bodies)
PATTERN_PREPROCESSOR_LINE = re.compile(r'^\s*#.*$', re.MULTILINE)

# Start of a declaration on its first line (the scan for a body begins here)
PATTERN_DECLARATION_START = re.compile(r'\btypedef\b|\bstruct\b|#pragma\b|__attribute__')
