"""
Type reconciliation: does a descriptor fit the destination it is bound to?

Every rule is enforced; the first failing one is reported.

1. a declared type letter must equal the destination's element type;
2. counting ('+') needs a scalar integer;
3. negatable ('!') needs a scalar boolean;
4. sequence-ness ('@') must match the destination exactly;
5. an optional value (':') cannot feed a sequence;
6. an optional value (':') is only for integers, floats and text.
"""
from .descriptors import Modifier, Type
from .destinations import Kind
from .faults import FaultCode, TypeMismatchError, getdoc

_NAMES = {
    Type.BOOLEAN: "boolean",
    Type.INTEGER: "integer",
    Type.FLOAT: "float",
    Type.TEXT: "text",
}


def describe(kind, /):
    """human label for a Kind ("integer", "text sequence", ...)."""
    return _NAMES[kind.type] + " sequence" * kind.sequence


def _rules(descriptor, kind):
    # yields (failed, message, hint); order only decides which failure is reported
    yield (
        descriptor.type is not None and descriptor.type is not kind.type,
        "declares %s but the destination holds %s" % (
            _NAMES.get(descriptor.type, "?"), describe(kind)
        ),
        "use '=%s' or leave the type out to infer it" % kind.type,
    )
    yield (
        descriptor.modifier is Modifier.COUNTING and kind is not Kind.INTEGER,
        "counts ('+') but the destination holds %s" % describe(kind),
        "counting options need an integer destination (for example: Ref(0))",
    )
    yield (
        descriptor.modifier is Modifier.NEGATABLE and kind is not Kind.BOOLEAN,
        "is negatable ('!') but the destination holds %s" % describe(kind),
        "negatable options need a boolean destination (for example: Ref(False))",
    )
    yield (
        descriptor.sequence != kind.sequence,
        "is a %s but the destination holds %s" % ("sequence" if descriptor.sequence else "scalar", describe(kind)),
        "add '@' for list destinations, drop it for single values",
    )
    yield (
        descriptor.modifier is Modifier.OPTIONAL and kind.sequence,
        "takes an optional value (':') but the destination holds %s" % describe(kind),
        "sequences always take a value: use '=' with '@'",
    )
    yield (
        descriptor.modifier is Modifier.OPTIONAL and kind.type not in (Type.INTEGER, Type.FLOAT, Type.TEXT),
        "takes an optional value (':') but the destination holds %s" % describe(kind),
        "booleans take no value: use the plain or '!' form",
    )


def reconcile(descriptor, kind, /):
    """
    Check a parsed Descriptor against a destination Kind.

    Raises
    - TypeMismatchError: on the first violated rule.
    """
    for failed, message, hint in _rules(descriptor, kind):
        if failed:
            raise TypeMismatchError(
                "option %r %s" % (descriptor.name, message),
                title="descriptor type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                descriptor=str(descriptor),
                kind=kind,
                hint=hint,
                docs=getdoc(FaultCode.TYPE_MISMATCH),
            )


__all__ = (
    "reconcile",
    "describe",
)
