"""
Scan-and-commit engine.

Phase one, scan(tokens, registry), walks the tokens left to right:

- a token not starting with '--' ends the scan; it and everything after it remain;
- '--' alone is consumed and ends the scan (end-of-options marker);
- '--name=value' carries an inline value, '--name' may take the next token;
- each resolved option yields a committer, collected in encounter order.

Phase two, commit(committers), applies the committers in order. It only runs after a
successful scan, so a failing scan (unknown option, missing value, bad conversion)
leaves every destination untouched. Scan faults carry `remainder`: the original tokens.

Value selection for a resolved option
- Arity.NONE takes no value (an inline value is ignored);
- an inline value is used as is, the next token is never consumed;
- at the end of input: REQUIRED fails, OPTIONAL goes on without a value;
- OPTIONAL does not consume a following token that starts with '--';
- otherwise the next token is the value.
"""
import logging as logmod

from .faults import ConversionError, FaultCode, MissingArgumentError, UnrecognizedOptionError, getdoc
from .handlers import Arity
from .utils import closest, ordinal

logging = logmod.getLogger(__name__)

PREFIX = "--"


def _unrecognized(name, token, index, tokens, registry):
    suggestions = closest(name, registry)
    if suggestions:
        hint = "did you mean '%s%s'?" % (PREFIX, suggestions[0])
    else:
        hint = "known options: %s" % (", ".join(PREFIX + known for known in registry) or "none")
    return UnrecognizedOptionError(
        "unknown option %r at %s position" % (token, ordinal(index)),
        title="unknown option",
        code=FaultCode.UNRECOGNIZED_OPTION,
        input=name,
        token=token,
        index=index,
        remainder=tokens,
        suggestions=suggestions,
        hint=hint,
        docs=getdoc(FaultCode.UNRECOGNIZED_OPTION),
    )


def _missing(name, token, index, tokens):
    return MissingArgumentError(
        "option %r at %s position requires a value" % (token, ordinal(index)),
        title="missing option value",
        code=FaultCode.MISSING_ARGUMENT,
        input=name,
        token=token,
        index=index,
        remainder=tokens,
        hint="provide a value (for example: %s%s=value or %s%s value)" % (PREFIX, name, PREFIX, name),
        docs=getdoc(FaultCode.MISSING_ARGUMENT),
    )


def scan(tokens, registry, /):
    """
    Resolve option tokens against a registry without touching any destination.

    Parameters
    - tokens: sequence of str
    - registry: mapping of option name -> handler (see longopts.registry.Registry)

    Returns
    - (remainder, committers): the unconsumed tokens and the pending writes, in order.

    Raises
    - UnrecognizedOptionError, MissingArgumentError, ConversionError; each carries
      remainder equal to the original tokens and the 1-based index of the option token.
    """
    tokens = list(tokens)
    committers = []
    index = 0

    while index < len(tokens):
        token = tokens[index]
        if not token.startswith(PREFIX):
            break
        index += 1
        if token == PREFIX:
            break

        name, separator, inline = token[len(PREFIX):].partition("=")
        try:
            handler = registry[name]
        except KeyError:
            raise _unrecognized(name, token, index, tokens, registry) from None

        position = index
        value = None
        if handler.arity is Arity.NONE:
            pass
        elif separator:
            value = inline
        elif index >= len(tokens):
            if handler.arity is Arity.REQUIRED:
                raise _missing(name, token, position, tokens)
        elif handler.arity is Arity.OPTIONAL and tokens[index].startswith(PREFIX):
            pass
        else:
            value = tokens[index]
            index += 1

        try:
            committers.append(handler.handle(value))
        except ConversionError as error:
            raise type(error)(
                "%s at %s position" % (error.message, ordinal(position)),
                **{**error.options, "token": token, "index": position, "remainder": tokens},
            ) from None
        logging.debug("resolved %r at %s position (value=%r)", token, ordinal(position), value)

    return tokens[index:], committers


def commit(committers, /):
    """
    Apply committers in order. Never raises for committers produced by scan().
    """
    for committer in committers:
        committer.commit()
    logging.debug("committed %d pending update(s)", len(committers))


__all__ = (
    "PREFIX",
    "scan",
    "commit",
)
