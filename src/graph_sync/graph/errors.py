"""Errors raised by graph collaborators.

The sync engine never raises these itself; they surface unchanged to the
caller when a graph operation performed during a sync fails.
"""


class GraphError(Exception):
    """Base class for graph operation failures."""


class NotFoundGraphError(GraphError):
    """Raised when a node or edge referenced by an operation is absent."""


class UsageGraphError(GraphError):
    """Raised when an operation conflicts with the graph's current state.

    Examples: adding a node whose key is taken, or merging an edge key
    that already connects a different pair of nodes.
    """
