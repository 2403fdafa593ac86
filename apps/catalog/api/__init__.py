from .serializers import (
    AttributeSerializer,
    AttributeValueSerializer,
    ProductSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    ProductAttributeSyncSerializer,
    ProductImageSerializer,
    ProductVariantSerializer,
    VariantSyncResultSerializer,
)

__all__ = [
    'AttributeSerializer',
    'AttributeValueSerializer',
    'ProductSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'ProductAttributeSyncSerializer',
    'ProductImageSerializer',
    'ProductVariantSerializer',
    'VariantSyncResultSerializer',
]
