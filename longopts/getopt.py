"""
longopts public surface: parse long options into caller-owned destinations.

What this module provides
- getoptions(tokens, *pairs): one-shot parse; returns the unconsumed tokens.
- Parser(*pairs, shell=False, fancy=False, colorful=True): reusable configuration with
  rich fault rendering in shell mode and an optional fallback hook.
- getosoptions(*pairs, ...): adapter over sys.argv; on success sys.argv[1:] is replaced
  by the remainder, on error sys.argv is left untouched.

Quick start
    from longopts import Ref, getosoptions

    length = Ref(24)
    data = Ref("file.dat")
    verbose = Ref(False)

    if __name__ == "__main__":
        getosoptions(
            ("length=i", length),   # numeric
            ("files=s", data),      # text
            ("verbose", verbose),   # flag
            shell=True,
        )

Given "--files=hello.world --length 10 --verbose rest", data.value is "hello.world",
length.value is 10, verbose.value is True and sys.argv[1:] is ["rest"].

Transactions
- Every parse builds a fresh registry, scans all option tokens, and only then commits.
  Any fault leaves all destinations at their previous values; the fault carries the
  original tokens as `remainder`.
"""
import logging as logmod
import shlex
import sys
from collections.abc import Iterable

from .faults import GetoptException, trigger
from .registry import Registry
from .scanner import commit, scan
from .utils import Unset, coalesce

logging = logmod.getLogger(__name__)


def _sanitized(pairs):
    for pair in pairs:
        if not isinstance(pair, tuple | list) or len(pair) != 2:
            raise TypeError("options must be (descriptor, destination) pairs, got %r" % (pair,))
        descriptor, destination = pair
        if not isinstance(descriptor, str):
            raise TypeError("descriptor must be a string, not %s" % type(descriptor).__name__)
        yield descriptor, destination


def _tokenize(tokens):
    if tokens is Unset:
        return sys.argv[1:]
    if isinstance(tokens, str):
        return shlex.split(tokens)
    if isinstance(tokens, Iterable):
        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("tokens must be a string or an iterable of strings")
        return tokens
    raise TypeError("tokens must be a string or an iterable of strings")


class Parser:
    """
    Reusable set of (descriptor, destination) pairs plus fault behavior.

    Parameters
    - *pairs: (descriptor, destination) tuples, see longopts.descriptors and
      longopts.destinations.
    - shell: render faults on stderr and exit(1) instead of raising.
    - fancy: render faults inside a rich panel.
    - colorful: style fault output.
    - prog: program name for fault headers (defaults to __main__.__prog__ or argv[0]).

    Each parse() builds a new registry, so one Parser can be reused across runs.
    """

    def __init__(self, *pairs, shell=False, fancy=False, colorful=True, prog=Unset):
        self._pairs = tuple(_sanitized(pairs))
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.prog = coalesce(prog)
        self._fallback = None

    @property
    def pairs(self):
        return self._pairs

    def __repr__(self):
        return "Parser(%s)" % ", ".join(repr(descriptor) for descriptor, _ in self._pairs)

    def fallback(self, fallback, /):
        """
        Install a hook called with every fault instead of raising/rendering it.

        Usable as a decorator; returns the hook. Pass None to remove it.
        """
        if fallback is not None and not callable(fallback):
            raise TypeError("fallback() argument must be callable or None")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        fault = fault.__replace__(
            **options, shell=self.shell, fancy=self.fancy, colorful=self.colorful, prog=self.prog
        )
        if self._fallback:
            self._fallback(fault)
        else:
            trigger(fault)

    def registry(self):
        """Build and return a fresh registry holding every pair."""
        registry = Registry()
        for descriptor, destination in self._pairs:
            registry.register(descriptor, destination)
        return registry

    def parse(self, tokens=Unset, /):
        """
        Parse tokens (sys.argv[1:] when omitted; a str is split with shlex).

        Returns
        - the remainder on success;
        - the original tokens when a fallback hook handled a fault.
        """
        tokens = _tokenize(tokens)
        try:
            remainder, committers = scan(tokens, self.registry())
        except GetoptException as fault:
            logging.debug("parse failed: %s", fault)
            self.trigger(fault, remainder=tokens)
            return list(tokens)
        commit(committers)
        return remainder


def getoptions(tokens, /, *pairs):
    """
    Parse tokens against (descriptor, destination) pairs and return the remainder.

    Raises the fault (see longopts.faults) on any error; destinations are untouched
    and fault.remainder holds the original tokens.
    """
    return Parser(*pairs).parse(tokens)


def getosoptions(*pairs, shell=False, fancy=False, colorful=True, prog=Unset):
    """
    Parse sys.argv[1:] and, on success, replace it with the remainder.

    sys.argv[0] (the program name) is kept. With an empty sys.argv there is nothing to
    parse and nothing is written back. On error sys.argv is left untouched and the
    fault is raised (or rendered followed by exit(1) when shell=True).
    """
    parser = Parser(*pairs, shell=shell, fancy=fancy, colorful=colorful, prog=prog)
    remainder = parser.parse(sys.argv[1:])
    if sys.argv:
        sys.argv[1:] = remainder
    return remainder


__all__ = (
    "Parser",
    "getoptions",
    "getosoptions",
)
