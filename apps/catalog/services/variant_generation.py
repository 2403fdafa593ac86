"""
Service for generating the variants of variable products.

Variants are derived from the attribute values a product selects: one variant
per combination of one value from each selected attribute. Generation is a
reconciliation against the variants already stored, keyed by the sorted
attribute value ids of each combination (its signature). Missing combinations
are created, obsolete variants are deleted and variants whose combination is
still valid are never touched, so their SKU, price and stock survive.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from django.conf import settings
from django.db import transaction
from django.utils.text import slugify

from apps.catalog.models import (
    AttributeValue,
    Product,
    ProductVariant,
    ProductVariantAttribute,
)

logger = logging.getLogger(__name__)

SKU_MAX_LENGTH = 100
SKU_SEPARATOR = '-'


class VariantCombinationLimitExceeded(ValueError):
    """Raised when a product's selections expand to more variants than allowed."""

    def __init__(self, product, count, limit):
        self.product = product
        self.count = count
        self.limit = limit
        super().__init__(
            f"Product {product.pk} would have {count} variants "
            f"(limit is {limit})"
        )


@dataclass
class VariantSyncResult:
    created: List[ProductVariant] = field(default_factory=list)
    deleted: List[ProductVariant] = field(default_factory=list)
    unchanged: List[ProductVariant] = field(default_factory=list)

    @property
    def has_changes(self):
        return bool(self.created or self.deleted)


# =============================================================================
# Combination helpers
# =============================================================================

def group_selections_by_attribute(
    selections: Iterable[Tuple[int, int]]
) -> Dict[int, List[int]]:
    """
    Group (attribute_id, attribute_value_id) pairs by attribute.

    Axes and values keep the order in which they are first seen; repeated
    pairs are ignored.
    """
    grouped = {}
    for attribute_id, attribute_value_id in selections:
        values = grouped.setdefault(attribute_id, [])
        if attribute_value_id not in values:
            values.append(attribute_value_id)
    return grouped


def cartesian_product(axes: Sequence[Sequence[int]]) -> List[List[int]]:
    """
    Every combination taking exactly one value from each axis.

    Example:
        cartesian_product([[1, 2], [3, 4]])
        -> [[1, 3], [1, 4], [2, 3], [2, 4]]
    """
    combinations = [[]]
    for values in axes:
        extended = []
        for partial in combinations:
            for value in values:
                extended.append(partial + [value])
        combinations = extended
    return combinations


def count_combinations(axes: Sequence[Sequence[int]]) -> int:
    total = 1
    for values in axes:
        total *= len(values)
    return total


def combination_signature(attribute_value_ids: Iterable[int]) -> Tuple[int, ...]:
    """Order-independent key of a combination: its sorted value ids."""
    return tuple(sorted(attribute_value_ids))


def build_variant_sku(product: Product, values: Sequence[AttributeValue]) -> str:
    """
    SKU for a generated variant: the product SKU (or slugified name) followed
    by the slug of each value, in combination order, cut to 100 characters.

    Truncation can make two SKUs equal; the unique index on
    ``ProductVariant.sku`` rejects the second one.
    """
    base = product.sku or slugify(product.name)
    parts = [base] + [slugify(value.value) for value in values]
    return SKU_SEPARATOR.join(parts)[:SKU_MAX_LENGTH]


# =============================================================================
# Service
# =============================================================================

class ProductVariantService:
    """
    Keeps the variants of a variable product in sync with its selected
    attribute values.

    Callers should run ``generate`` in the same transaction that changed the
    product's selections. Row locks are the caller's concern.
    """

    @staticmethod
    def get_selections(product: Product) -> List[Tuple[int, int]]:
        """The product's (attribute_id, attribute_value_id) pairs in canonical order."""
        return list(
            product.product_attributes.order_by(
                'attribute__sort_order', 'attribute_id',
                'attribute_value__sort_order', 'attribute_value_id'
            ).values_list('attribute_id', 'attribute_value_id')
        )

    @staticmethod
    def get_max_combinations():
        return getattr(settings, 'CATALOG_MAX_VARIANT_COMBINATIONS', None)

    @classmethod
    def generate(cls, product: Product) -> VariantSyncResult:
        """
        Create, keep and delete variants so they match the product's selections.

        Simple products are left alone. A variable product without selections
        loses all of its variants.

        Raises:
            VariantCombinationLimitExceeded: when a limit is configured and the
                selections expand past it. Nothing is written.
            IntegrityError: when a generated SKU is already taken.
        """
        if not product.is_variable:
            logger.debug("Skipping variant generation for simple product %s", product.pk)
            return VariantSyncResult()

        with transaction.atomic():
            selections = cls.get_selections(product)

            if not selections:
                result = VariantSyncResult(
                    deleted=cls._delete_variants(
                        list(product.variants.prefetch_related('variant_attributes'))
                    )
                )
                logger.info(
                    "Product %s has no attribute selections, deleted %d variants",
                    product.pk, len(result.deleted)
                )
                return result

            grouped = group_selections_by_attribute(selections)
            axes = list(grouped.values())

            limit = cls.get_max_combinations()
            count = count_combinations(axes)
            if limit is not None and count > limit:
                raise VariantCombinationLimitExceeded(product, count, limit)

            attribute_for_value = {
                attribute_value_id: attribute_id
                for attribute_id, attribute_value_ids in grouped.items()
                for attribute_value_id in attribute_value_ids
            }
            result = cls._sync_variants(
                product, cartesian_product(axes), attribute_for_value
            )

        logger.info(
            "Generated variants for product %s: %d created, %d deleted, %d unchanged",
            product.pk, len(result.created), len(result.deleted), len(result.unchanged)
        )
        return result

    @classmethod
    def _sync_variants(cls, product, combinations, attribute_for_value):
        wanted = {
            combination_signature(combination): combination
            for combination in combinations
        }

        existing = {}
        obsolete = []
        for variant in product.variants.prefetch_related('variant_attributes'):
            signature = variant.signature
            if signature in wanted and signature not in existing:
                existing[signature] = variant
            else:
                # Includes later duplicates of an already kept signature
                obsolete.append(variant)

        result = VariantSyncResult(unchanged=list(existing.values()))

        # Obsolete variants go first so their SKUs are free for new ones
        result.deleted = cls._delete_variants(obsolete)

        missing = [
            combination for signature, combination in wanted.items()
            if signature not in existing
        ]
        if missing:
            values_by_id = AttributeValue.objects.in_bulk(list(attribute_for_value))
            for combination in missing:
                result.created.append(cls._create_variant(
                    product, combination, values_by_id, attribute_for_value
                ))

        return result

    @staticmethod
    def _create_variant(product, combination, values_by_id, attribute_for_value):
        sku = build_variant_sku(
            product, [values_by_id[value_id] for value_id in combination]
        )
        variant = ProductVariant.objects.create(
            product=product,
            sku=sku,
            stock_quantity=0,
        )
        ProductVariantAttribute.objects.bulk_create([
            ProductVariantAttribute(
                variant=variant,
                attribute_id=attribute_for_value[value_id],
                attribute_value_id=value_id,
            )
            for value_id in combination
        ])
        logger.debug("Created variant %s for product %s", sku, product.pk)
        return variant

    @staticmethod
    def _delete_variants(variants):
        if not variants:
            return []
        ids = [variant.pk for variant in variants]
        ProductVariantAttribute.objects.filter(variant_id__in=ids).delete()
        ProductVariant.objects.filter(pk__in=ids).delete()
        for variant in variants:
            logger.debug("Deleted variant %s of product %s", variant.sku, variant.product_id)
        return variants
