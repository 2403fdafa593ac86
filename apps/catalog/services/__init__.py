from .image_matching import images_for_selection, matches_selection
from .variant_generation import (
    ProductVariantService,
    VariantCombinationLimitExceeded,
    VariantSyncResult,
)

__all__ = [
    'ProductVariantService',
    'VariantCombinationLimitExceeded',
    'VariantSyncResult',
    'images_for_selection',
    'matches_selection',
]
