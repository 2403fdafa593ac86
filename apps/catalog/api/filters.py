from django.db.models.functions import Coalesce
from django_filters import rest_framework as filters
from apps.catalog.models import Product, ProductImage, ProductVariant


class ProductFilter(filters.FilterSet):
    """Filter for products by type, status and base price."""

    min_price = filters.NumberFilter(field_name='base_price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='base_price', lookup_expr='lte')

    class Meta:
        model = Product
        fields = ['product_type', 'status']


class ProductVariantFilter(filters.FilterSet):
    """Filter for variants with support for attribute values."""

    product = filters.CharFilter(field_name='product__slug')
    product_id = filters.NumberFilter(field_name='product__id')

    # Price filters, on the override or the product's base price
    min_price = filters.NumberFilter(field_name='effective_price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='effective_price', lookup_expr='lte')

    # Stock filters
    in_stock = filters.BooleanFilter(method='filter_in_stock')

    # Attribute filters
    attribute = filters.CharFilter(method='filter_by_attribute')

    class Meta:
        model = ProductVariant
        fields = ['product', 'product_id', 'sku']

    def filter_queryset(self, queryset):
        queryset = queryset.alias(
            effective_price=Coalesce('price_override', 'product__base_price')
        )
        return super().filter_queryset(queryset)

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(stock_quantity__gt=0)
        elif value is False:
            return queryset.filter(stock_quantity=0)
        return queryset

    def filter_by_attribute(self, queryset, name, value):
        """
        Filter by attribute in format: attribute_slug:value
        Example: ?attribute=color:red
        """
        if ':' not in value:
            return queryset

        attr_slug, attr_value = value.split(':', 1)
        return queryset.filter(
            variant_attributes__attribute__slug=attr_slug,
            variant_attributes__attribute_value__value__iexact=attr_value
        )


class ProductImageFilter(filters.FilterSet):
    """Filter for product images."""

    product = filters.CharFilter(field_name='product__slug')
    product_id = filters.NumberFilter(field_name='product__id')
    general = filters.BooleanFilter(method='filter_general')

    class Meta:
        model = ProductImage
        fields = ['product', 'product_id', 'is_primary']

    def filter_general(self, queryset, name, value):
        if value is True:
            return queryset.general()
        elif value is False:
            return queryset.attribute_specific()
        return queryset
