"""ErrorHandler Protocol: the error-reporting capability of toml-tree.

There is no process-wide error callback. A handler is either bound to a
``Tree`` when it is constructed or passed to an individual parse call (the
per-call handler wins). The handler receives the ``TomlTreeError`` and may
raise something else, log it, or record it; if it returns normally the
original error is raised anyway, so a call never continues past a reported
error.

Example::

    from toml_tree import Tree, parse_toml_in_arena
    from toml_tree.errors import TomlTreeError

    class ConfigError(Exception):
        pass

    def to_config_error(error: TomlTreeError) -> None:
        raise ConfigError(str(error)) from error

    tree = Tree(error_handler=to_config_error)
    parse_toml_in_arena("a = ", tree)   # raises ConfigError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, Protocol, runtime_checkable

if TYPE_CHECKING:
    from toml_tree.errors import TomlTreeError

__all__ = ["ErrorHandler", "report"]


@runtime_checkable
class ErrorHandler(Protocol):
    """Structural protocol for error handlers.

    Any callable accepting a single ``TomlTreeError`` satisfies it.
    """

    def __call__(self, error: TomlTreeError) -> None: ...


def report(error: TomlTreeError, handler: ErrorHandler | None) -> NoReturn:
    """Send ``error`` to ``handler``, if any, then raise it.

    With no handler this simply raises ``error``.
    """
    if handler is not None:
        handler(error)
    raise error
