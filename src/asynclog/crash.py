"""Optional crash-reporting hook.

The hook is an optional dependency: when the reporting library is not
installed, crash reporting is simply off. Discovery happens once, at init.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Protocol

DEFAULT_CRASH_REPORTER = "sentry_sdk:capture_exception"


class CrashReporter(Protocol):
    """A callable that records one exception with an external service."""

    def __call__(self, error: BaseException) -> object:
        ...


class CrashReporterDiscoveryError(RuntimeError):
    """The reporting module is installed but the hook could not be resolved."""


def parse_target(target: str) -> tuple[str, str]:
    """Split ``"module:attribute"`` into its parts."""
    module_name, sep, attribute = target.partition(":")
    module_name, attribute = module_name.strip(), attribute.strip()
    if not sep or not module_name or not attribute:
        raise ValueError(f"crash reporter must look like 'module:attribute'. Got: {target!r}")
    return module_name, attribute


def discover_crash_reporter(
    target: str = DEFAULT_CRASH_REPORTER,
    *,
    import_module: Callable[[str], object] = importlib.import_module,
) -> CrashReporter | None:
    """Resolve the crash-reporting hook named by `target`.

    Returns None when the module is not installed (a normal configuration).

    Raises:
        CrashReporterDiscoveryError: the module exists but the hook is missing,
            not callable, or the module failed while importing.
    """
    module_name, attribute = parse_target(target)
    try:
        module = import_module(module_name)
    except ModuleNotFoundError as exc:
        # Only "this module is absent" counts as not installed; a missing
        # dependency of an installed module is a real problem.
        if exc.name is not None and (module_name == exc.name or module_name.startswith(exc.name + ".")):
            return None
        raise CrashReporterDiscoveryError(f"failed to import {module_name}: {exc}") from exc
    except Exception as exc:  # noqa: BLE001 - import-time failures of an optional dependency
        raise CrashReporterDiscoveryError(f"failed to import {module_name}: {exc}") from exc

    hook = getattr(module, attribute, None)
    if hook is None:
        raise CrashReporterDiscoveryError(f"{module_name} has no attribute {attribute!r}")
    if not callable(hook):
        raise CrashReporterDiscoveryError(f"{module_name}.{attribute} is not callable")
    return hook
