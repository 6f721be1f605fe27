"""Graph collaborator layer consumed by the sync engine.

Modules:

- ``events``     -- ``GraphEvent`` names and the ``EventRegistry``.
- ``protocols``  -- ``SyncableGraph``: the capability interface the engine
  requires from any graph it reconciles.
- ``errors``     -- collaborator error types.
- ``memory``     -- ``EventedGraph``: an in-process ``networkx``-backed
  graph that emits events on every mutation.
"""

from .errors import GraphError, NotFoundGraphError, UsageGraphError
from .events import EventRegistry, GraphEvent, Listener
from .memory import EventedGraph
from .protocols import SyncableGraph

__all__ = [
    "EventRegistry",
    "EventedGraph",
    "GraphError",
    "GraphEvent",
    "Listener",
    "NotFoundGraphError",
    "SyncableGraph",
    "UsageGraphError",
]
