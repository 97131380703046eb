r"""
longopts descriptor grammar.

A descriptor is the textual half of a (descriptor, destination) pair. It names the
option and optionally declares the value type and one modifier:

    name ( ('=' | ':') type-letter )? modifier?

- name:        [-_a-zA-Z0-9]+ (what follows '--' on the command line)
- '=' / ':':   required / optional value
- type-letter: b (boolean), i (integer), f (float), s (text)
- modifier:    ! (negatable), + (counting), @ (sequence)

Examples
    "verbose"      plain flag (boolean destination)
    "verbose!"     --verbose / --noverbose
    "debug+"       each --debug increments an integer
    "length=i"     --length 10, --length=10
    "level:i"      --level [N] (0 when omitted)
    "include=s@"   each --include appends
    "length"       type inferred from the destination

Rules checked here (grammar only, never type compatibility)
- a value marker cannot be combined with '!' or '+';
- ':' cannot be combined with '@' (a descriptor carries one modifier at most);
- booleans cannot be sequences ('=b@').
Getopt::Long forms that are deliberately unsupported (aliases, hashes, repeat counts,
declared defaults, short options) are rejected with a hint naming the feature.
"""
import collections
import enum
import re

from .faults import FaultCode, MalformedDescriptorError, getdoc

# Compiled once; the pattern object is immutable and safe to share.
GRAMMAR = re.compile(r"(?P<name>[-_a-zA-Z0-9]+)(?:(?P<marker>[=:])(?P<type>[bifs]))?(?P<modifier>[!+@])?")


class Type(enum.StrEnum):
    """element type letters accepted after '=' or ':'."""
    BOOLEAN = "b"
    INTEGER = "i"
    FLOAT = "f"
    TEXT = "s"


class Modifier(enum.Enum):
    NONE = ""
    NEGATABLE = "!"
    COUNTING = "+"
    OPTIONAL = ":"
    SEQUENCE = "@"


class Descriptor(collections.namedtuple("Descriptor", ("name", "type", "modifier"))):
    """
    Parsed, immutable form of a descriptor string.

    Fields
    - name: str
    - type: Type | None (None when the type is left to the destination)
    - modifier: Modifier
    """
    __slots__ = ()

    @property
    def negated(self):
        """the implicit negated name reserved by a negatable flag, else None."""
        return "no" + self.name if self.modifier is Modifier.NEGATABLE else None

    @property
    def sequence(self):
        return self.modifier is Modifier.SEQUENCE

    def __str__(self):
        if self.modifier is Modifier.OPTIONAL:
            return "%s:%s" % (self.name, self.type)
        return self.name + ("=" + self.type if self.type is not None else "") + self.modifier.value


# (needle test, feature, hint) for Getopt::Long syntax that is not implemented
_UNSUPPORTED = (
    (lambda source: "|" in source, "alternate names",
     "register each name with its own destination instead of 'a|b'"),
    (lambda source: "%" in source, "key-value (hash) arguments",
     "use a text sequence ('name=s@') and split the values yourself"),
    (lambda source: "{" in source, "repeat counts",
     "use a sequence ('name=s@') and pass the option once per value"),
    (lambda source: re.search(r":[-+]?\d", source) is not None, "declared default values",
     "set the default on the destination before parsing"),
    (lambda source: re.match(r"-[a-zA-Z0-9]", source) is not None,
     "short options", "descriptors name long options only (used as '--name')"),
)


def _malformed(source, message, hint):
    return MalformedDescriptorError(
        message,
        title="malformed descriptor",
        code=FaultCode.MALFORMED_DESCRIPTOR,
        descriptor=source,
        hint=hint,
        docs=getdoc(FaultCode.MALFORMED_DESCRIPTOR),
    )


def parse(source, /):
    """
    Parse a descriptor string into a Descriptor.

    Raises
    - TypeError: when source is not a string.
    - MalformedDescriptorError: when source does not follow the grammar, combines
      mutually exclusive parts, or uses an unsupported Getopt::Long feature.
    """
    if not isinstance(source, str):
        raise TypeError("descriptor must be a string, not %s" % type(source).__name__)

    for test, feature, hint in _UNSUPPORTED:
        if test(source):
            raise _malformed(source, "descriptor %r uses %s, which are not supported" % (source, feature), hint)

    if not (match := GRAMMAR.fullmatch(source)):
        raise _malformed(
            source,
            "descriptor %r is not understood" % source,
            "use name[=|:type][!|+|@] with type one of b, i, f, s (for example: 'length=i')",
        )

    marker = match["marker"]
    modifier = Modifier(match["modifier"] or "")
    type_ = Type(match["type"]) if match["type"] else None

    if marker and modifier in (Modifier.NEGATABLE, Modifier.COUNTING):
        raise _malformed(
            source,
            "descriptor %r combines a value type with %r" % (source, modifier.value),
            "'!' and '+' take no value: drop '%s%s' (for example: '%s%s')" % (
                marker, match["type"], match["name"], modifier.value
            ),
        )
    if marker == ":" and modifier is Modifier.SEQUENCE:
        raise _malformed(
            source,
            "descriptor %r combines an optional value with '@'" % source,
            "sequences always take a value: use '%s=%s@'" % (match["name"], match["type"]),
        )
    if type_ is Type.BOOLEAN and modifier is Modifier.SEQUENCE:
        raise _malformed(
            source,
            "descriptor %r declares a boolean sequence" % source,
            "booleans are flags: use '%s' or '%s!'" % (match["name"], match["name"]),
        )

    if marker == ":":
        modifier = Modifier.OPTIONAL

    return Descriptor(match["name"], type_, modifier)


__all__ = (
    "GRAMMAR",
    "Type",
    "Modifier",
    "Descriptor",
    "parse",
)
