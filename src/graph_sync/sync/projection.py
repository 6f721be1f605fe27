"""Attribute projection for synced elements.

``include`` is an exclusive allow-list and silently overrides ``ignore``:
when it is non-empty every included name is copied, even if the same name
is also ignored, and names missing from the source are written as
``None``.  ``ignore`` applies only when ``include`` is empty.
"""

from __future__ import annotations

from typing import Any, Collection, Mapping


def project_attributes(
    attributes: Mapping[str, Any],
    include: Collection[str] = (),
    ignore: Collection[str] = (),
) -> dict[str, Any]:
    """Return the attributes of a source element that propagate to the target.

    Args:
        attributes: Attributes of the source element (not modified).
        include: Names to copy exclusively. Takes precedence over *ignore*.
        ignore: Names to drop from a full copy when *include* is empty.

    Returns:
        A new dict. With a non-empty *include* its keys are exactly the
        included names.
    """
    if include:
        return {name: attributes.get(name) for name in include}

    ignored = set(ignore)
    return {
        name: value
        for name, value in attributes.items()
        if name not in ignored
    }
