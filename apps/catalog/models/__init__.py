"""
Catalog models for ecommerce with generated product variants.

Model Hierarchy:
- Attribute: Axis of variation (Color, Size, Storage)
- AttributeValue: Values on each axis (Red, M, 256GB)
- Product: Base product, simple or variable
- ProductAttribute: Attribute values a variable product offers
- ProductVariant: Generated SKU for one combination of values
- ProductVariantAttribute: The values that make up a variant
- ProductImage: Images, optionally tagged with an attribute combination
"""

from .attribute import Attribute, AttributeValue
from .product import Product, ProductAttribute
from .variant import ProductVariant, ProductVariantAttribute
from .image import ProductImage

__all__ = [
    'Attribute',
    'AttributeValue',
    'Product',
    'ProductAttribute',
    'ProductVariant',
    'ProductVariantAttribute',
    'ProductImage',
]
