"""
longopts destinations: caller-owned storage that options write into.

Python has no pointers, so a destination is a small binding object that knows how to
read and write one storage slot, plus the shape (Kind) of what lives there.

Bindings
- Ref(value) / Ref(type[, value]): a standalone mutable cell.
    >>> length = Ref(24)              # Kind.INTEGER, inferred from the value
    >>> files = Ref(list[str])        # Kind.TEXT_SEQUENCE, starts as []
    >>> ratio = Ref(float, 0.5)       # declared and initialised
- Attr(object, name): an attribute; shape from class annotations, else the current value.
    >>> Attr(settings, "verbose")
- Item(mapping, key): a mapping entry; shape from the current value (or hint=...).
    >>> Item(config, "jobs")

Kinds (closed set)
- BOOLEAN, INTEGER, FLOAT, TEXT
- INTEGER_SEQUENCE, FLOAT_SEQUENCE, TEXT_SEQUENCE
Boolean sequences, unions, mappings, None and anything else are unsupported.

Contract
- Destinations are only written during commit, after a fully successful scan.
- Sequence destinations append in place: the caller's list object keeps its identity.
"""
import enum
import typing

from .descriptors import Type
from .faults import FaultCode, UnsupportedDestinationError, getdoc
from .utils import Unset


class Kind(enum.Enum):
    """shape of a destination: element type plus sequence-ness."""
    BOOLEAN = (Type.BOOLEAN, False)
    INTEGER = (Type.INTEGER, False)
    INTEGER_SEQUENCE = (Type.INTEGER, True)
    FLOAT = (Type.FLOAT, False)
    FLOAT_SEQUENCE = (Type.FLOAT, True)
    TEXT = (Type.TEXT, False)
    TEXT_SEQUENCE = (Type.TEXT, True)

    @property
    def type(self):
        return self.value[0]

    @property
    def sequence(self):
        return self.value[1]

    @property
    def zero(self):
        """zero value of the kind (a fresh list for sequences)."""
        if self.sequence:
            return []
        return _ZEROS[self.type]


_ZEROS = {
    Type.BOOLEAN: False,
    Type.INTEGER: 0,
    Type.FLOAT: 0.0,
    Type.TEXT: "",
}

# bool must be looked up by exact type: it is a subclass of int.
_SCALARS = {
    bool: Kind.BOOLEAN,
    int: Kind.INTEGER,
    float: Kind.FLOAT,
    str: Kind.TEXT,
}

_SEQUENCES = {
    int: Kind.INTEGER_SEQUENCE,
    float: Kind.FLOAT_SEQUENCE,
    str: Kind.TEXT_SEQUENCE,
}


def _unsupported(subject, hint="bind a bool, int, float or str, or a list of int, float or str"):
    return UnsupportedDestinationError(
        "destination %s is not a supported type" % subject,
        title="unsupported destination",
        code=FaultCode.UNSUPPORTED_DESTINATION,
        destination=subject,
        hint=hint,
        docs=getdoc(FaultCode.UNSUPPORTED_DESTINATION),
    )


def classify(hint, /):
    """
    Map a type hint (bool, int, list[str], typing.List[int], ...) to a Kind.

    Returns None when the hint does not describe one of the seven supported shapes.
    """
    if hint in _SCALARS:
        return _SCALARS[hint]
    if typing.get_origin(hint) is list:
        match typing.get_args(hint):
            case (element,) if element in _SEQUENCES:
                return _SEQUENCES[element]
    return None


def infer(value, /):
    """
    Map a current value to a Kind.

    Lists are classified by their elements, which must all share one supported type;
    an empty list carries no element type and cannot be classified.
    """
    if type(value) in _SCALARS:
        return _SCALARS[type(value)]
    if isinstance(value, list) and value:
        types = {type(item) for item in value}
        if len(types) == 1 and (element := types.pop()) in _SEQUENCES:
            return _SEQUENCES[element]
    return None


def _fits(kind, value):
    # a missing or None slot reads as the kind's zero value
    if value is Unset or value is None:
        return True
    if kind.sequence and isinstance(value, list) and not value:
        return True
    return infer(value) is kind


def _resolve(subject, hint=Unset, value=Unset):
    # an explicit hint always wins over the current value, which must still fit it
    if hint is not Unset:
        kind = classify(hint)
        if kind is not None and not _fits(kind, value):
            raise _unsupported(
                "%s holding %r" % (subject, value),
                "the current value must match the declared type (%s)" % kind.name.lower().replace("_", " "),
            )
    elif value is not Unset:
        kind = infer(value)
    else:
        kind = None
    if kind is None:
        if isinstance(value, list) and not value and hint is Unset:
            raise _unsupported(subject, "an empty list has no element type: declare it (for example: Ref(list[int]))")
        raise _unsupported(subject)
    return kind


class Destination:
    """
    base binding; subclasses implement _load() and set().

    _load() returns the raw slot, None when it is missing. get() reads a missing or None
    slot as the kind's zero value, so counting from an unset slot starts at 0.

    attributes
    - kind: Kind
    """
    __slots__ = ("kind",)

    def get(self):
        value = self._load()
        return self.kind.zero if value is None else value

    def set(self, value):
        raise NotImplementedError

    def _load(self):
        raise NotImplementedError

    def append(self, value):
        items = self._load()
        if items is None:
            self.set([value])
        else:
            items.append(value)

    def __repr__(self):
        return "%s(%s, kind=%s)" % (type(self).__name__, self._target(), self.kind.name)

    def _target(self):
        return repr(self._load())


class Ref(Destination):
    """
    standalone mutable cell.

    - Ref(value): shape inferred from value (Ref(3), Ref("x"), Ref([1, 2])).
    - Ref(hint): shape declared, starts at the kind's zero value (Ref(int), Ref(list[str])).
    - Ref(hint, value): shape declared and value given.
    """
    __slots__ = ("value",)

    def __init__(self, source, value=Unset, /):
        if isinstance(source, type) or typing.get_origin(source) is not None:
            self.kind = _resolve("Ref(%r)" % (source,), hint=source)
            self.value = value if value is not Unset else self.kind.zero
        elif value is not Unset:
            raise TypeError("Ref() first argument must be a type when an initial value is given")
        else:
            self.kind = _resolve("Ref(%r)" % (source,), value=source)
            self.value = source

    def _load(self):
        return self.value

    def set(self, value):
        self.value = value

    def __eq__(self, other):
        if isinstance(other, Ref):
            return self.kind is other.kind and self.value == other.value
        return NotImplemented

    __hash__ = None


class Attr(Destination):
    """
    attribute binding: Attr(object, "name").

    The shape is taken from the class annotations (typing.get_type_hints) when the
    attribute is annotated, otherwise from its current value. hint= overrides both.
    """
    __slots__ = ("object", "name")

    def __init__(self, object, name, /, hint=Unset):
        if not isinstance(name, str):
            raise TypeError("Attr() second argument must be a string")
        self.object = object
        self.name = name
        subject = "%s.%s" % (type(object).__name__, name)
        if hint is Unset:
            try:
                hint = typing.get_type_hints(type(object)).get(name, Unset)
            except (NameError, TypeError):
                hint = Unset
        self.kind = _resolve(subject, hint=hint, value=getattr(object, name, Unset))

    def _load(self):
        return getattr(self.object, self.name, None)

    def set(self, value):
        setattr(self.object, self.name, value)

    def _target(self):
        return "%s.%s" % (type(self.object).__name__, self.name)


class Item(Destination):
    """
    mapping entry binding: Item(mapping, key).

    The shape is taken from the current value (mapping[key]), or from hint= when the
    key is absent or holds an empty list.
    """
    __slots__ = ("mapping", "key")

    def __init__(self, mapping, key, /, hint=Unset):
        self.mapping = mapping
        self.key = key
        self.kind = _resolve("[%r]" % (key,), hint=hint, value=mapping.get(key, Unset))

    def _load(self):
        return self.mapping.get(self.key)

    def set(self, value):
        self.mapping[self.key] = value

    def _target(self):
        return "[%r]" % (self.key,)


def destination(object, /):
    """
    Return object when it is a Destination, otherwise raise UnsupportedDestinationError.
    """
    if isinstance(object, Destination):
        return object
    raise _unsupported(
        "%r of type %s" % (object, type(object).__name__),
        "wrap the storage: Ref(value), Attr(object, 'name') or Item(mapping, 'key')",
    )


__all__ = (
    "Kind",
    "Destination",
    "Ref",
    "Attr",
    "Item",
    "classify",
    "infer",
    "destination",
)
