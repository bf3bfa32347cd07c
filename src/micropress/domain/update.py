"""Micropub update semantics: replace, then add, then delete.

All three steps run against one snapshot of the stored properties and
produce a new property set; nothing is persisted in between.
"""

from __future__ import annotations

import copy

from micropress.domain.operations import UpdateRequest
from micropress.domain.properties import PropertySet


def apply_update(properties: PropertySet, request: UpdateRequest) -> PropertySet:
    """Return *properties* with *request* applied.

    - ``replace``: the listed values overwrite the property.
    - ``add``: new properties are set; existing ones get the values appended
      (duplicates are kept).
    - ``delete``: a bare name removes the property; a name with values
      removes each listed value once. A property left empty is dropped.
      Deleting anything that is not there is a no-op.
    """
    result: PropertySet = copy.deepcopy(properties)

    for name, values in request.replace.items():
        result[name] = list(values)

    for name, values in request.add.items():
        if name not in result:
            result[name] = list(values)
        else:
            result[name] = result[name] + list(values)

    if isinstance(request.delete, list):
        for name in request.delete:
            result.pop(name, None)
    else:
        for name, values in request.delete.items():
            if not values:
                result.pop(name, None)
            elif name in result:
                remaining = _remove_each_once(result[name], values)
                if remaining:
                    result[name] = remaining
                else:
                    del result[name]

    return result


def _remove_each_once(current: list, unwanted: list) -> list:
    remaining = list(current)
    for value in unwanted:
        if value in remaining:
            remaining.remove(value)
    return remaining
