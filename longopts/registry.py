"""
Handler registry: option name -> handler.

register(descriptor, destination) runs the whole build-time pipeline:

    grammar -> destination shape -> reconciliation -> name conflicts -> handler

A negatable flag registers two handlers ("name" and "noname") over one destination, so
its negated name is reserved too: a later "noname" conflicts, and so does a negatable
"name" registered after a plain "noname".

A registry that raised part-way is left populated up to the failing pair; callers treat
the whole parse as failed and build a fresh registry next time.
"""
import logging as logmod
from collections.abc import Mapping

from .descriptors import Modifier, parse
from .destinations import Kind, destination as bind
from .faults import FaultCode, NameConflictError, getdoc
from .handlers import CONVERTERS, ConstantHandler, CountingHandler, ScalarHandler, SequenceHandler
from .reconcile import reconcile

logging = logmod.getLogger(__name__)


class Registry(Mapping):
    """read-only mapping view over the registered handlers; grows through register()."""

    def __init__(self):
        self._handlers = {}

    def __getitem__(self, name):
        return self._handlers[name]

    def __iter__(self):
        return iter(self._handlers)

    def __len__(self):
        return len(self._handlers)

    def __repr__(self):
        return "Registry(%s)" % ", ".join(map(repr, self._handlers))

    def register(self, descriptor, destination, /):
        """
        Parse, validate and install one (descriptor, destination) pair.

        Returns the handler installed under the descriptor's name.

        Raises
        - MalformedDescriptorError, UnsupportedDestinationError, TypeMismatchError,
          NameConflictError.
        """
        parsed = parse(descriptor)
        destination = bind(destination)
        reconcile(parsed, destination.kind)
        self._check_conflict(parsed)

        handlers = self._build(parsed, destination)
        for name, handler in handlers.items():
            handler.name = name
            self._handlers[name] = handler
            logging.debug("registered --%s as %r", name, handler)
        return handlers[parsed.name]

    def _check_conflict(self, descriptor):
        for name in filter(None, (descriptor.name, descriptor.negated)):
            if name in self._handlers:
                if name == descriptor.name:
                    message = "option %r is already registered" % name
                else:
                    message = "negated form %r of option %r is already registered" % (name, descriptor.name)
                raise NameConflictError(
                    message,
                    title="option already exists",
                    code=FaultCode.NAME_CONFLICT,
                    descriptor=str(descriptor),
                    input=name,
                    hint="every option name, including the 'no' form of negatable flags, must be unique",
                    docs=getdoc(FaultCode.NAME_CONFLICT),
                )

    @staticmethod
    def _build(descriptor, destination):
        kind = destination.kind
        match kind, descriptor.modifier:
            case Kind.BOOLEAN, Modifier.NEGATABLE:
                return {
                    descriptor.name: ConstantHandler(destination, True),
                    descriptor.negated: ConstantHandler(destination, False),
                }
            case Kind.BOOLEAN, _:
                return {descriptor.name: ConstantHandler(destination, True)}
            case Kind.INTEGER, Modifier.COUNTING:
                return {descriptor.name: CountingHandler(destination)}
            case (Kind.INTEGER | Kind.FLOAT | Kind.TEXT), modifier:
                return {descriptor.name: ScalarHandler(
                    destination, CONVERTERS[kind.type], optional=modifier is Modifier.OPTIONAL
                )}
            case (Kind.INTEGER_SEQUENCE | Kind.FLOAT_SEQUENCE | Kind.TEXT_SEQUENCE), _:
                return {descriptor.name: SequenceHandler(destination, CONVERTERS[kind.type])}
        raise AssertionError("unreachable: %r with %r" % (descriptor, kind))


__all__ = (
    "Registry",
)
