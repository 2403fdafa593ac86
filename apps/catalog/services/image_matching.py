"""
Resolution of product images for an attribute selection.

An image tagged with an attribute combination is shown only when every
(attribute, value) pair it is tagged with is part of the current selection.
When at least one tagged image matches, the tagged images replace the general
ones; otherwise the general images are shown.
"""

from typing import Any, Iterable, List, Optional, Set, Tuple

Pair = Tuple[int, int]


def _pair_key(pair: Any) -> Pair:
    if isinstance(pair, dict):
        return int(pair['attribute_id']), int(pair['attribute_value_id'])
    attribute_id, attribute_value_id = pair
    return int(attribute_id), int(attribute_value_id)


def combination_pairs(combination: Optional[Iterable[Any]]) -> Set[Pair]:
    """
    Normalize a combination or a selection to a set of (attribute_id, value_id).

    Accepts ``{"attribute_id": 1, "attribute_value_id": 2}`` dicts as stored in
    ``ProductImage.attribute_combination`` as well as ``(1, 2)`` tuples.
    """
    if not combination:
        return set()
    return {_pair_key(pair) for pair in combination}


def _combination_of(image: Any):
    if isinstance(image, dict):
        return image.get('attribute_combination')
    return image.attribute_combination


def is_general(image: Any) -> bool:
    return not _combination_of(image)


def is_attribute_specific(image: Any) -> bool:
    return not is_general(image)


def matches_selection(image: Any, selection: Optional[Iterable[Any]]) -> bool:
    """
    Whether an image applies to the selected attribute values.

    General images match any selection. Tagged images never match an empty
    selection, and otherwise need all of their pairs to be selected; selected
    pairs on axes the image is not tagged for are ignored.
    """
    if is_general(image):
        return True

    selected = combination_pairs(selection)
    if not selected:
        return False

    return combination_pairs(_combination_of(image)) <= selected


def images_for_selection(images: Iterable[Any], selection: Optional[Iterable[Any]]) -> List[Any]:
    """
    Pick the images to display for a selection, keeping the input order.

    Args:
        images: ProductImage instances (or dicts with ``attribute_combination``)
        selection: (attribute_id, attribute_value_id) pairs, possibly empty

    Returns:
        The matching tagged images, or the general images when the selection
        is empty or no tagged image matches it.
    """
    images = list(images)
    general = [image for image in images if is_general(image)]

    selected = combination_pairs(selection)
    if not selected:
        return general

    specific = [
        image for image in images
        if is_attribute_specific(image)
        and combination_pairs(_combination_of(image)) <= selected
    ]
    return specific or general
