"""
longopts handlers and committers.

A handler is what an option name resolves to at scan time. It knows how many value
tokens it wants (its Arity) and turns the value (a string, or None when absent) into a
committer: a deferred write to its destination. Handlers never write themselves, so a
scan that fails halfway leaves every destination untouched.

Handlers
- ConstantHandler(destination, value): no value; assigns a constant (flags, negated flags).
- CountingHandler(destination): no value; increments an integer.
- ScalarHandler(destination, convert, optional=False): one value (required or optional);
  an absent optional value stores the kind's zero value.
- SequenceHandler(destination, convert): one required value, appended.

Committers
- Assign(destination, value), Increment(destination), Append(destination, value).
"""
import enum
import re

from .descriptors import Type
from .faults import ConversionError, FaultCode, getdoc
from .utils import rename


class Arity(enum.Enum):
    NONE = 0
    OPTIONAL = 1
    REQUIRED = 2


# strconv.Atoi-like: sign and ASCII digits, nothing else (no spaces, no underscores)
_INTEGER = re.compile(r"[-+]?[0-9]+")


class Uncastable(ValueError):
    """raised by converters; the scanner turns it into a ConversionError with context."""


@rename("integer")
def _integer(token):
    if not _INTEGER.fullmatch(token):
        raise Uncastable("%r is not an integer" % token)
    return int(token)


@rename("float")
def _float(token):
    if token != token.strip() or "_" in token:
        raise Uncastable("%r is not a number" % token)
    try:
        return float(token)
    except ValueError:
        raise Uncastable("%r is not a number" % token) from None


@rename("text")
def _text(token):
    return token


CONVERTERS = {
    Type.INTEGER: _integer,
    Type.FLOAT: _float,
    Type.TEXT: _text,
}


class Committer:
    """deferred write to a destination; commit() cannot fail."""
    __slots__ = ("destination",)

    def __init__(self, destination):
        self.destination = destination

    def commit(self):
        raise NotImplementedError

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.destination)


class Assign(Committer):
    __slots__ = ("value",)

    def __init__(self, destination, value):
        super().__init__(destination)
        self.value = value

    def commit(self):
        self.destination.set(self.value)

    def __repr__(self):
        return "Assign(%r, %r)" % (self.destination, self.value)


class Increment(Committer):
    __slots__ = ()

    def commit(self):
        self.destination.set(self.destination.get() + 1)


class Append(Committer):
    __slots__ = ("value",)

    def __init__(self, destination, value):
        super().__init__(destination)
        self.value = value

    def commit(self):
        self.destination.append(self.value)

    def __repr__(self):
        return "Append(%r, %r)" % (self.destination, self.value)


class Handler:
    """
    base handler.

    attributes
    - arity: Arity
    - destination: Destination
    - name: option name (set by the registry, used in fault messages)
    """
    arity = Arity.NONE

    def __init__(self, destination):
        self.destination = destination
        self.name = None

    def handle(self, value):
        raise NotImplementedError

    def _convert(self, convert, value):
        try:
            return convert(value)
        except Uncastable as error:
            raise ConversionError(
                "option %r: %s" % (self.name, error),
                title="invalid option value",
                code=FaultCode.CONVERSION_FAILED,
                input=self.name,
                value=value,
                hint="pass %s %s value (for example: --%s=%s)" % (
                    "an" if convert is _integer else "a", convert.__name__, self.name,
                    {_integer: "10", _float: "2.5"}.get(convert, "value"),
                ),
                docs=getdoc(FaultCode.CONVERSION_FAILED),
            ) from None

    def __repr__(self):
        return "%s(%r, arity=%s)" % (type(self).__name__, self.name, self.arity.name)


class ConstantHandler(Handler):
    def __init__(self, destination, value):
        super().__init__(destination)
        self.value = value

    def handle(self, value):
        return Assign(self.destination, self.value)


class CountingHandler(Handler):
    def handle(self, value):
        return Increment(self.destination)


class ScalarHandler(Handler):
    def __init__(self, destination, convert, optional=False):
        super().__init__(destination)
        self.convert = convert
        self.arity = Arity.OPTIONAL if optional else Arity.REQUIRED

    def handle(self, value):
        if value is None:
            # only reachable for optional handlers: the scanner guards required ones
            return Assign(self.destination, self.destination.kind.zero)
        return Assign(self.destination, self._convert(self.convert, value))


class SequenceHandler(Handler):
    arity = Arity.REQUIRED

    def __init__(self, destination, convert):
        super().__init__(destination)
        self.convert = convert

    def handle(self, value):
        return Append(self.destination, self._convert(self.convert, value))


__all__ = (
    "Arity",
    "CONVERTERS",
    "Committer",
    "Assign",
    "Increment",
    "Append",
    "Handler",
    "ConstantHandler",
    "CountingHandler",
    "ScalarHandler",
    "SequenceHandler",
)
