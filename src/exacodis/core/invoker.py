"""Reflective invocation of class methods for white-box testing.

Resolves a target (live instance, class, dotted class name or the compact
``"pkg.module.ClassName::method"`` form) and a method name into a
zero-argument callable. Private methods are reachable, including
name-mangled ``__method`` ones, and static methods are called unbound.
"""

import importlib
import inspect
import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from exacodis.errors import ConstructionError, InvalidInvocationError, ResolutionError

log = logging.getLogger(__name__)

COMPACT_SEPARATOR = "::"


def resolve_class(name: str) -> type:
    """Import a class from its dotted name (``pkg.module.ClassName``)."""
    module_name, _, class_name = name.rpartition(".")
    if not module_name or not class_name:
        raise ResolutionError(
            f"Class name must be fully qualified (pkg.module.ClassName): '{name}'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ResolutionError(f"Unable to import module '{module_name}': {e}") from e

    cls = getattr(module, class_name, None)
    if not inspect.isclass(cls):
        raise ResolutionError(f"Class '{class_name}' not found in module '{module_name}'")
    return cls


def required_parameters(cls: type) -> list[str]:
    """List the constructor parameters that have no default value."""
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins)
        return []

    return [
        name
        for name, param in signature.parameters.items()
        if param.default is inspect.Parameter.empty
        and param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def mangled_names(cls: type, method: str) -> list[str]:
    """Candidate attribute names for ``method`` on ``cls``, mangled first."""
    if method.startswith("__") and not method.endswith("__"):
        names = [f"_{klass.__name__.lstrip('_')}{method}" for klass in cls.__mro__]
        return names + [method]
    return [method]


class ReflectiveInvoker:
    """Zero-argument thunk calling a method regardless of its visibility."""

    def __init__(
        self,
        target: Any,
        method: Optional[str] = None,
        args: Sequence[Any] = (),
        kwargs: Optional[Mapping[str, Any]] = None,
    ):
        """Validate the invocation request.

        Args:
            target: Live instance, class, dotted class name or compact
                ``"pkg.module.ClassName::method"`` form
            method: Method name, required unless given in compact form
            args: Positional arguments for the method
            kwargs: Named arguments for the method

        Raises:
            InvalidInvocationError: If no usable method name is supplied
        """
        if isinstance(target, str) and COMPACT_SEPARATOR in target:
            target, _, compact_method = target.partition(COMPACT_SEPARATOR)
            if method and compact_method and method != compact_method:
                raise InvalidInvocationError(
                    f"Conflicting method names: '{compact_method}' and '{method}'"
                )
            method = method or compact_method

        if not method or not method.strip():
            raise InvalidInvocationError("A method name is required")
        if isinstance(target, str) and not target.strip():
            raise InvalidInvocationError("A class name is required")

        self.target = target
        self.method = method.strip()
        self.args = tuple(args)
        self.kwargs = dict(kwargs or {})

    def __call__(self) -> Any:
        func = self.resolve()
        log.debug("Invoking %s", self.describe())
        return func(*self.args, **self.kwargs)

    def describe(self) -> str:
        """Readable ``ClassName::method`` form of the target."""
        return f"{self._class_name()}{COMPACT_SEPARATOR}{self.method}"

    def resolve(self) -> Callable[..., Any]:
        """Resolve the target method into a callable.

        A class or class name is instantiated without arguments, after
        checking that its constructor has no required parameter.

        Raises:
            ConstructionError: If the constructor requires parameters
            ResolutionError: If the class or the method cannot be found
        """
        if isinstance(self.target, str):
            cls = resolve_class(self.target)
            instance = self._instantiate(cls)
        elif inspect.isclass(self.target):
            cls = self.target
            instance = self._instantiate(cls)
        else:
            cls = type(self.target)
            instance = self.target

        for name in mangled_names(cls, self.method):
            try:
                raw = inspect.getattr_static(cls, name)
            except AttributeError:
                continue

            if isinstance(raw, staticmethod):
                # Drop the instance binding
                return raw.__func__
            if isinstance(raw, classmethod):
                return raw.__func__.__get__(cls, cls)

            bound = getattr(instance, name)
            if not callable(bound):
                raise ResolutionError(f"'{cls.__name__}.{name}' is not callable")
            return bound

        raise ResolutionError(f"Method '{self.method}' not found on class '{cls.__name__}'")

    def _instantiate(self, cls: type) -> Any:
        required = required_parameters(cls)
        if required:
            raise ConstructionError(
                f"Cannot auto-instantiate '{cls.__name__}': the constructor requires "
                f"{', '.join(required)}; supply a live instance instead"
            )
        return cls()

    def _class_name(self) -> str:
        if isinstance(self.target, str):
            return self.target.rpartition(".")[2]
        if inspect.isclass(self.target):
            return self.target.__name__
        return type(self.target).__name__
