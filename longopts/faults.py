"""
longopts faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by phase (registration vs. scanning) to keep logs/searches predictable.
- GetoptException: base type that carries message + options and knows how to render
  itself in a friendly, lowercased and actionable way.
- RegistrationError / ScanError: phase bases. Registration faults come from bad
  (descriptor, destination) pairs; scan faults come from bad argument tokens and always
  carry the untouched token list as `remainder`.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The registry and the scanner raise faults directly; the getopt layer merges runtime
  options (shell, fancy, colorful) and calls trigger(fault, **ctx).
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich
  on stderr and the process exits with status 1.

Host hooks (read from __main__ when present)
- __prog__: program name shown in headers when the fault carries no explicit prog.
- __styles__: style overrides for the palette below.
- __codes__: FaultCode -> label remapping used by FaultCode.normalize().
- __docs__: FaultCode -> documentation string returned by getdoc().
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registration (2110x)
      • MALFORMED_DESCRIPTOR, UNSUPPORTED_DESTINATION, TYPE_MISMATCH, NAME_CONFLICT
    - scanning (2111x)
      • UNRECOGNIZED_OPTION, MISSING_ARGUMENT, CONVERSION_FAILED

    rationale
    - codes are searchable in logs and normalized to a string via normalize() so hosts
      can remap them to friendlier labels without breaking stability.
    """
    # --- registration errors (2110x) ---
    MALFORMED_DESCRIPTOR        = 21101
    UNSUPPORTED_DESTINATION     = 21102
    TYPE_MISMATCH               = 21103
    NAME_CONFLICT               = 21104

    # --- scanning errors (2111x) ---
    UNRECOGNIZED_OPTION         = 21111
    MISSING_ARGUMENT            = 21112
    CONVERSION_FAILED           = 21113

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to override
        numeric ids with friendlier labels. when no mapping is present, the numeric
        value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    # an explicit prog wins over the host hook
    if prog := options.get("prog"):
        return prog
    try:
        return __import__("__main__").__prog__
    except AttributeError:
        pass
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return "longopts"


class GetoptException(Exception):
    """
    base of every fault raised by longopts.

    options (all optional, merged by trigger() and __replace__)
    - title, code, hint, docs: rendering copy.
    - shell, fancy, colorful, prog, ratio: rendering/trigger behavior.
    - any context the raiser wants to attach (descriptor, token, index, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    @property
    def remainder(self):
        # the full original token list (a fresh list); empty when no tokens were attached
        return list(self.options.get("remainder", ()))

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        title = self.options.get("title") or type(self).__name__

        header = Text.assemble(
            "[ ",
            text(_prog(self.options), styler("prog-name")),
            " — ",
            text(code, styler("code")),
            " | ",
            text(title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message or "", styler("error-message"))
        parts = [message]
        if self.hint:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            width = console.width - 4
            try:
                width = int(width * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*parts), title=header, title_align="left", width=width)

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(GetoptException):
    """a (descriptor, destination) pair could not be registered."""

    @property
    def descriptor(self):
        return self.options.get("descriptor")


class ScanError(GetoptException):
    """an argument token could not be consumed; no destination was touched."""

    @property
    def index(self):
        return self.options.get("index")


class MalformedDescriptorError(RegistrationError): ...
class UnsupportedDestinationError(RegistrationError): ...
class TypeMismatchError(RegistrationError): ...
class NameConflictError(RegistrationError): ...

class UnrecognizedOptionError(ScanError):
    @property
    def suggestions(self):
        return list(self.options.get("suggestions", ()))

class MissingArgumentError(ScanError): ...
class ConversionError(ScanError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see GetoptException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys are
    FaultCode instances and values are short documentation strings. when not found,
    returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "GetoptException",
    "RegistrationError",
    "ScanError",
    "MalformedDescriptorError",
    "UnsupportedDestinationError",
    "TypeMismatchError",
    "NameConflictError",
    "UnrecognizedOptionError",
    "MissingArgumentError",
    "ConversionError",
    "trigger",
    "getdoc",
)
