"""Turns generated Python source into callable functions."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DynamicLoader:
    """Compiles and loads generated routines for one instance.

    Each loader hands out its own names, so two instances never share a
    counter.
    """

    PREFIX = "__compiled_molang_"

    def __init__(self) -> None:
        self._next_id = 0

    def fetch_unique_name(self) -> str:
        """Return a routine name not yet used by this loader."""
        name = f"{self.PREFIX}{self._next_id}"
        self._next_id += 1
        return name

    def load(self, name: str, source: str, namespace: dict[str, Any]) -> Callable[..., Any]:
        """Compile ``source``, which must define a function ``name``.

        The function runs with ``namespace`` as its globals.
        """
        filename = f"<molang:{id(self):x}:{name}>"
        code = compile(source, filename, "exec")
        module_globals: dict[str, Any] = {"__builtins__": __builtins__, "__name__": name}
        module_globals.update(namespace)
        exec(code, module_globals)
        function = module_globals[name]
        logger.debug("Loaded %s", name)
        return function
