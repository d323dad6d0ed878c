"""
Assertion sites: *where* a snapshot assertion runs.

A site names the owner of the test (a dotted class path such as
``tests.test_orders.TestCheckout``, or just the module for plain test
functions), the test method, and an optional explicit snapshot name that
replaces the method in the snapshot key.

Sites can be built two ways:

- explicitly, with :meth:`AssertionSite.of` (deterministic; this is what the
  pytest plugin does from the collected test node), or
- by walking the live call stack with :meth:`AssertionSite.from_stack`, which
  returns the first frame that does not belong to snapmatch, the test runner
  or the concurrency runtime. Frames with synthetic names (``<genexpr>``,
  ``<listcomp>``, ``<lambda>``, ``<module>``) are skipped in favour of the
  function that encloses them. Methods are owned by the runtime class of
  ``self``, matching the class pytest collected the test under.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable
from dataclasses import dataclass, replace
from types import FrameType

from snapmatch.core.errors import ResolutionError

# Module prefixes whose frames are never the "caller" of an assertion.
IGNORED_MODULES: tuple[str, ...] = (
    "snapmatch",
    "_pytest",
    "pytest",
    "pluggy",
    "unittest",
    "threading",
    "concurrent",
    "asyncio",
    "contextvars",
    "importlib",
    "runpy",
)


@dataclass(frozen=True, slots=True)
class AssertionSite:
    """
    Immutable description of one assertion call site.

    Attributes
    ----------
    owner : str
        Dotted path of the class (or module) holding the test.
    method : str
        Name of the test function or method.
    name : str | None
        Explicit snapshot name; when set it replaces ``method`` in the key.
    """

    owner: str
    method: str
    name: str | None = None

    @classmethod
    def of(cls, owner: str, method: str, name: str | None = None) -> AssertionSite:
        """Build a site from explicit parts, rejecting empty components."""
        if not owner or not method:
            raise ResolutionError("an assertion site needs both an owner and a method")
        return cls(owner=owner, method=method, name=name)

    @classmethod
    def from_stack(
        cls,
        name: str | None = None,
        ignored: Iterable[str] = IGNORED_MODULES,
    ) -> AssertionSite:
        """Derive the site from the first qualifying frame on the call stack."""
        prefixes = tuple(ignored)
        frame = inspect.currentframe()
        try:
            while frame is not None:
                module = frame.f_globals.get("__name__", "__main__")
                if not _is_ignored(module, prefixes) and not _is_synthetic(frame):
                    return cls(owner=_owner_of(frame, module), method=frame.f_code.co_name, name=name)
                frame = frame.f_back
        finally:
            # Break the frame reference cycle.
            del frame
        raise ResolutionError("no caller outside snapmatch and the test runner was found")

    def named(self, name: str | None) -> AssertionSite:
        """Return a copy carrying ``name`` as the snapshot name override."""
        return replace(self, name=name)

    @property
    def key(self) -> str:
        """``{owner/with/slashes}/{name or method}``: the registry key."""
        return f"{self.owner.replace('.', '/')}/{self.name or self.method}"


def _is_ignored(module: str, prefixes: tuple[str, ...]) -> bool:
    return any(module == p or module.startswith(p + ".") for p in prefixes)


def _is_synthetic(frame: FrameType) -> bool:
    """Generator expressions, comprehensions, lambdas and module bodies are not tests."""
    return frame.f_code.co_name.startswith("<")


def _owner_of(frame: FrameType, module: str) -> str:
    """Return ``module.Class`` for methods and ``module`` for plain functions.

    The runtime class of ``self`` (or ``cls``) wins over the declaring class, so
    a test method inherited by several test classes gets one owner per class.
    """
    code = frame.f_code
    if code.co_argcount:
        first = code.co_varnames[0]
        bound = frame.f_locals.get(first)
        if first == "self" and bound is not None:
            owner_cls = type(bound)
            return f"{owner_cls.__module__}.{owner_cls.__qualname__}"
        if first == "cls" and isinstance(bound, type):
            return f"{bound.__module__}.{bound.__qualname__}"
    qualname = getattr(frame.f_code, "co_qualname", frame.f_code.co_name)
    scope, _, _ = qualname.rpartition(".")
    if scope and "<" not in scope:
        return f"{module}.{scope}"
    return module


__all__ = ["IGNORED_MODULES", "AssertionSite"]
