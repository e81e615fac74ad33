"""Geometric erasing of vector layer geometry.

Erasing removes every segment that passes within half the eraser size of
the erase point. Subpaths are split around the removed segments, so a
single stroke can become several shorter strokes.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from conscript.core.geometry import distance_to_segment
from conscript.domain import Layer, PathGeometry, Point, SubPath, VectorLayer


@dataclass
class EraseResult:
    """Outcome of erasing at one point.

    Attributes:
        layers: Resulting layer stack
        changed: True if any geometry was removed
        removed_ids: Ids of layers deleted because all their geometry was erased
    """

    layers: list[Layer]
    changed: bool = False
    removed_ids: list[str] = field(default_factory=list)


def erase_subpath(subpath: SubPath, point: Point, radius: float) -> list[SubPath]:
    """Erase the parts of a subpath within ``radius / 2`` of ``point``.

    Consecutive vertices are walked as segments. Surviving segments are
    accumulated into chains; an erased segment ends the current chain.
    Chains shorter than two points are dropped.

    A subpath without any erased segment is returned as-is, so erasing far
    from all geometry never rewrites it.

    Args:
        subpath: Subpath to erase from
        point: Erase point
        radius: Eraser size; segments closer than ``radius / 2`` are removed

    Returns:
        Surviving subpaths (possibly empty)
    """
    threshold = radius / 2
    vertices = subpath.vertices()

    if len(vertices) == 1:
        only = vertices[0]
        if distance_to_segment(point, only, only) < threshold:
            return []
        return [subpath]

    survivors: list[SubPath] = []
    chain: list[Point] = []
    erased_any = False

    for seg_start, seg_end in zip(vertices, vertices[1:]):
        if distance_to_segment(point, seg_start, seg_end) < threshold:
            erased_any = True
            if len(chain) >= 2:
                survivors.append(SubPath(points=tuple(chain)))
            chain = []
        else:
            if not chain:
                chain.append(seg_start)
            chain.append(seg_end)

    if not erased_any:
        return [subpath]

    if len(chain) >= 2:
        survivors.append(SubPath(points=tuple(chain)))

    return survivors


def erase_geometry(geometry: PathGeometry, point: Point, radius: float) -> PathGeometry:
    """Erase around ``point`` from every subpath of a geometry.

    Args:
        geometry: Geometry to erase from
        point: Erase point
        radius: Eraser size

    Returns:
        The same geometry object if nothing was erased, otherwise a new one
    """
    subpaths: list[SubPath] = []
    changed = False
    for subpath in geometry.subpaths:
        surviving = erase_subpath(subpath, point, radius)
        if surviving != [subpath]:
            changed = True
        subpaths.extend(surviving)

    if not changed:
        return geometry
    return PathGeometry(subpaths=tuple(subpaths))


def is_erasable(layer: Layer) -> bool:
    """Check if the eraser may modify a layer.

    Only unlocked, visible vector layers are erasable.
    """
    return isinstance(layer, VectorLayer) and not layer.locked and layer.visible


def erase_layers(layers: Sequence[Layer], point: Point, radius: float) -> EraseResult:
    """Erase around ``point`` across a whole layer stack.

    Locked, hidden and raster layers are left untouched. A vector layer
    that had geometry and loses all of it is removed from the stack, unless
    it is the only layer left, in which case it stays with empty geometry.

    Args:
        layers: Layer stack in paint order
        point: Erase point
        radius: Eraser size

    Returns:
        EraseResult with the new stack; unchanged layers are the same objects
    """
    result = EraseResult(layers=[])

    for layer in layers:
        if not is_erasable(layer) or layer.is_empty():
            result.layers.append(layer)
            continue

        geometry = erase_geometry(layer.geometry, point, radius)
        if geometry is layer.geometry:
            result.layers.append(layer)
            continue

        result.changed = True
        if geometry.is_empty():
            result.removed_ids.append(layer.id)
            continue
        result.layers.append(replace(layer, geometry=geometry))

    if not result.layers and result.removed_ids:
        # Keep the stack non-empty: restore the last removed layer, emptied
        kept_id = result.removed_ids.pop()
        kept = next(layer for layer in layers if layer.id == kept_id)
        result.layers.append(replace(kept, geometry=PathGeometry()))

    return result
