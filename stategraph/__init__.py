"""
stategraph: State-Space Exploration for Model-Based Testing
============================================================

This package explores the reachable state space of a finite-state transition
system and answers the path questions a test generator needs: the shortest
path to every state, every simple path to every state, and the concrete path
an explicit event trace takes.

Core modules
------------
serialization
    Canonical string keys for states and events.
events
    Event normalization and event-generation strategies.
graph_types
    Segments, steps, paths, and the protocols a model must satisfy.
options
    Exploration options (event strategy, boundary filter, serializers).
transition_system
    Memoized depth-first expansion into an adjacency map.
path_analysis
    Shortest paths, simple paths, and trace resolution.
depth_first
    Model-agnostic traversal and simple-path enumeration.
errors
    Structured error hierarchy.

Quick start
-----------
>>> from stategraph import get_shortest_paths, get_path_from_events
>>> paths = get_shortest_paths(machine)
>>> for key, entry in paths.items():
...     print(key, [step.event for step in entry.paths[0].steps])

Package layout
--------------
::

    stategraph/
    ├── __init__.py            ← this file
    ├── errors.py
    ├── events.py
    ├── serialization.py
    ├── graph_types.py
    ├── options.py
    ├── transition_system.py
    ├── path_analysis.py
    └── depth_first.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from typing import TYPE_CHECKING, List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
__author__ = "stategraph contributors"
__license__ = "MIT"
__all__: List[str] = []          # populated incrementally below

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal registry: (module_name, list_of_names_to_import)
# ---------------------------------------------------------------------------

_CORE_MODULES = {
    "errors": [
        "StateGraphError",
        "TransitionError",
        "TraceMismatchError",
        "SerializationError",
        "InvalidEventError",
    ],
    "events": [
        "FixedEvents",
        "GeneratedEvents",
        "to_event_object",
        "event_type",
    ],
    "serialization": [
        "serialize_state",
        "serialize_event",
        "deserialize_event_string",
    ],
    "graph_types": [
        "Segment",
        "Step",
        "StatePath",
        "StatePaths",
        "StateLike",
        "MachineLike",
    ],
    "options": [
        "GraphOptions",
        "get_graph_options",
    ],
    "transition_system": [
        "explore",
        "get_adjacency_map",
    ],
    "path_analysis": [
        "shortest_paths",
        "get_shortest_paths",
        "simple_paths",
        "get_simple_paths",
        "get_simple_paths_as_list",
        "resolve_trace",
        "get_path_from_events",
    ],
    "depth_first": [
        "DepthOptions",
        "VisitedContext",
        "depth_first_traversal",
        "depth_simple_paths",
    ],
}

# ---------------------------------------------------------------------------
# Import helper
# ---------------------------------------------------------------------------

def _import_names(module_rel_name: str, names: List[str]) -> None:
    """Import *names* from a submodule and bind them in the package namespace.

    An ``ImportError`` or a missing name propagates; every module listed in
    the registry is required.
    """
    fq_name = f"{__name__}.{module_rel_name}"
    try:
        mod = importlib.import_module(fq_name)
    except ImportError as exc:
        raise ImportError(
            f"stategraph: required submodule '{module_rel_name}' "
            f"failed to import: {exc}"
        ) from exc

    current_module = sys.modules[__name__]
    for name in names:
        obj = getattr(mod, name, None)
        if obj is None:
            raise AttributeError(
                f"stategraph.{module_rel_name} does not export '{name}'"
            )
        setattr(current_module, name, obj)
        __all__.append(name)

    # Also expose the submodule itself, so that both
    #   stategraph.path_analysis.shortest_paths
    # and
    #   stategraph.shortest_paths
    # work.
    setattr(current_module, module_rel_name, mod)
    if module_rel_name not in __all__:
        __all__.append(module_rel_name)
    _log.debug("Loaded %s (%d names)", fq_name, len(names))


for _mod, _names in _CORE_MODULES.items():
    _import_names(_mod, _names)

del _mod, _names

# ---------------------------------------------------------------------------
# Package-level utilities
# ---------------------------------------------------------------------------

def list_submodules() -> List[str]:
    """Return the names of all submodules in the package."""
    return sorted(_CORE_MODULES)


def package_info() -> dict:
    """Return a dict of metadata about the installed package.

    Useful for logging/diagnostics inside test generators.
    """
    loaded = []
    missing = []
    for mod_name in list_submodules():
        if f"{__name__}.{mod_name}" in sys.modules:
            loaded.append(mod_name)
        else:
            missing.append(mod_name)

    return {
        "package": __name__,
        "version": __version__,
        "python": sys.version,
        "loaded_submodules": loaded,
        "missing_submodules": missing,
        "all_exports": list(__all__),
    }


__all__ += ["list_submodules", "package_info", "__version__"]

# ---------------------------------------------------------------------------
# TYPE_CHECKING block: gives IDEs full visibility without runtime cost
# ---------------------------------------------------------------------------

if TYPE_CHECKING:
    from .errors import (
        StateGraphError as StateGraphError,
        TransitionError as TransitionError,
        TraceMismatchError as TraceMismatchError,
        SerializationError as SerializationError,
        InvalidEventError as InvalidEventError,
    )
    from .events import (
        FixedEvents as FixedEvents,
        GeneratedEvents as GeneratedEvents,
        to_event_object as to_event_object,
        event_type as event_type,
    )
    from .serialization import (
        serialize_state as serialize_state,
        serialize_event as serialize_event,
        deserialize_event_string as deserialize_event_string,
    )
    from .graph_types import (
        Segment as Segment,
        Step as Step,
        StatePath as StatePath,
        StatePaths as StatePaths,
        StateLike as StateLike,
        MachineLike as MachineLike,
    )
    from .options import (
        GraphOptions as GraphOptions,
        get_graph_options as get_graph_options,
    )
    from .transition_system import (
        explore as explore,
        get_adjacency_map as get_adjacency_map,
    )
    from .path_analysis import (
        shortest_paths as shortest_paths,
        get_shortest_paths as get_shortest_paths,
        simple_paths as simple_paths,
        get_simple_paths as get_simple_paths,
        get_simple_paths_as_list as get_simple_paths_as_list,
        resolve_trace as resolve_trace,
        get_path_from_events as get_path_from_events,
    )
    from .depth_first import (
        DepthOptions as DepthOptions,
        VisitedContext as VisitedContext,
        depth_first_traversal as depth_first_traversal,
        depth_simple_paths as depth_simple_paths,
    )
