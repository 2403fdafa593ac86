from rest_framework import serializers
from apps.catalog.models import (
    Attribute,
    AttributeValue,
    Product,
    ProductAttribute,
    ProductImage,
    ProductVariant,
    ProductVariantAttribute,
)


# =============================================================================
# Attribute Serializers
# =============================================================================

class AttributeValueSerializer(serializers.ModelSerializer):
    attribute_name = serializers.CharField(
        source='attribute.name', read_only=True
    )
    attribute_slug = serializers.CharField(
        source='attribute.slug', read_only=True
    )
    display_value = serializers.CharField(read_only=True)

    class Meta:
        model = AttributeValue
        fields = [
            'id', 'attribute', 'attribute_name', 'attribute_slug',
            'value', 'display_value', 'hex', 'sort_order'
        ]


class AttributeSerializer(serializers.ModelSerializer):
    values = AttributeValueSerializer(many=True, read_only=True)

    class Meta:
        model = Attribute
        fields = [
            'id', 'name', 'slug', 'description', 'type',
            'is_required', 'sort_order', 'values'
        ]
        extra_kwargs = {'slug': {'required': False}}


# =============================================================================
# Attribute Combination Serializers
# =============================================================================

class AttributePairSerializer(serializers.Serializer):
    """One (attribute, value) pair; the value must belong to the attribute."""
    attribute_id = serializers.IntegerField()
    attribute_value_id = serializers.IntegerField()

    def validate(self, data):
        value = AttributeValue.objects.filter(pk=data['attribute_value_id']).first()
        if value is None:
            raise serializers.ValidationError({
                'attribute_value_id': f"Valor de atributo {data['attribute_value_id']} não existe."
            })
        if value.attribute_id != data['attribute_id']:
            raise serializers.ValidationError({
                'attribute_value_id': (
                    f"Valor {value.pk} não pertence ao atributo {data['attribute_id']}."
                )
            })
        return data


def validate_distinct_attributes(pairs):
    attribute_ids = [pair['attribute_id'] for pair in pairs]
    if len(attribute_ids) != len(set(attribute_ids)):
        raise serializers.ValidationError(
            'Cada atributo pode aparecer apenas uma vez na combinação.'
        )
    return pairs


class AttributeSelectionSerializer(serializers.Serializer):
    """The values a product offers on one attribute axis."""
    attribute_id = serializers.PrimaryKeyRelatedField(
        queryset=Attribute.objects.all()
    )
    attribute_value_ids = serializers.ListField(
        child=serializers.IntegerField(),
        allow_empty=False
    )

    def validate(self, data):
        attribute = data['attribute_id']
        requested = list(dict.fromkeys(data['attribute_value_ids']))
        found = set(
            attribute.values.filter(pk__in=requested).values_list('pk', flat=True)
        )
        invalid = [value_id for value_id in requested if value_id not in found]
        if invalid:
            raise serializers.ValidationError({
                'attribute_value_ids': (
                    f"Valores {invalid} não pertencem ao atributo {attribute.name}."
                )
            })
        return {'attribute': attribute, 'attribute_value_ids': requested}


class ProductAttributeSyncSerializer(serializers.Serializer):
    """
    Payload for replacing a product's attribute selections.

    {"attributes": [{"attribute_id": 1, "attribute_value_ids": [3, 4]}, ...]}
    """
    attributes = AttributeSelectionSerializer(many=True)

    def validate_attributes(self, value):
        attribute_ids = [item['attribute'].pk for item in value]
        if len(attribute_ids) != len(set(attribute_ids)):
            raise serializers.ValidationError(
                'Cada atributo pode aparecer apenas uma vez.'
            )
        return value

    def get_attributes_data(self):
        """Validated selections as {attribute_id: [attribute_value_id, ...]}."""
        return {
            item['attribute'].pk: item['attribute_value_ids']
            for item in self.validated_data['attributes']
        }


# =============================================================================
# Product Image Serializer
# =============================================================================

class ProductImageSerializer(serializers.ModelSerializer):
    attribute_combination = AttributePairSerializer(
        many=True, required=False, allow_null=True
    )
    attribute_combination_display = serializers.CharField(
        source='get_attribute_combination_display', read_only=True
    )

    class Meta:
        model = ProductImage
        fields = [
            'id', 'product', 'image', 'alt_text', 'sort_order', 'is_primary',
            'attribute_combination', 'attribute_combination_display'
        ]

    def validate_attribute_combination(self, value):
        if not value:
            return None
        validate_distinct_attributes(value)
        return [
            {
                'attribute_id': pair['attribute_id'],
                'attribute_value_id': pair['attribute_value_id'],
            }
            for pair in value
        ]

    # The combination is stored as plain JSON, not as related rows
    def create(self, validated_data):
        return ProductImage.objects.create(**validated_data)

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data.get('attribute_combination') is None:
            data['attribute_combination'] = []
        return data


# =============================================================================
# Variant Serializers
# =============================================================================

class ProductVariantAttributeSerializer(serializers.ModelSerializer):
    attribute_name = serializers.CharField(
        source='attribute.name', read_only=True
    )
    attribute_slug = serializers.CharField(
        source='attribute.slug', read_only=True
    )
    value = serializers.CharField(
        source='attribute_value.value', read_only=True
    )
    display_value = serializers.CharField(
        source='attribute_value.display_value', read_only=True
    )
    hex = serializers.CharField(
        source='attribute_value.hex', read_only=True
    )

    class Meta:
        model = ProductVariantAttribute
        fields = [
            'id', 'attribute', 'attribute_value', 'attribute_name',
            'attribute_slug', 'value', 'display_value', 'hex'
        ]


class ProductVariantSerializer(serializers.ModelSerializer):
    """Base variant serializer. Combinations are owned by variant generation."""
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, read_only=True
    )
    is_in_stock = serializers.BooleanField(read_only=True)
    variant_attributes = ProductVariantAttributeSerializer(
        many=True, read_only=True
    )

    class Meta:
        model = ProductVariant
        fields = [
            'id', 'product', 'sku', 'price_override', 'price',
            'stock_quantity', 'is_in_stock', 'variant_attributes',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['product']


class DeletedVariantSerializer(serializers.ModelSerializer):
    # Rows are gone; pairs come from the prefetch done before deletion
    attribute_combination = serializers.SerializerMethodField()

    class Meta:
        model = ProductVariant
        fields = [
            'id', 'sku', 'price_override', 'stock_quantity', 'product',
            'attribute_combination'
        ]

    def get_attribute_combination(self, obj):
        return [
            {'attribute_id': va.attribute_id, 'attribute_value_id': va.attribute_value_id}
            for va in obj.variant_attributes.all()
        ]


class VariantSyncResultSerializer(serializers.Serializer):
    created = ProductVariantSerializer(many=True)
    deleted = DeletedVariantSerializer(many=True)
    unchanged = serializers.SerializerMethodField()

    def get_unchanged(self, obj):
        return len(obj.unchanged)


# =============================================================================
# Product Serializers
# =============================================================================

class ProductSerializer(serializers.ModelSerializer):
    """Base product serializer."""
    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'sku', 'description', 'base_price',
            'product_type', 'status', 'stock_quantity',
            'created_at', 'updated_at'
        ]
        extra_kwargs = {'slug': {'required': False}}


class ProductListSerializer(serializers.ModelSerializer):
    """Product list with counts."""
    variant_count = serializers.IntegerField(read_only=True)
    total_stock = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'sku', 'base_price', 'product_type',
            'status', 'variant_count', 'total_stock'
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product detail with selections, variants and images."""
    attributes = serializers.SerializerMethodField()
    variants = ProductVariantSerializer(many=True, read_only=True)
    images = ProductImageSerializer(many=True, read_only=True)
    total_stock = serializers.IntegerField(read_only=True)
    is_in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'sku', 'description', 'base_price',
            'product_type', 'status', 'stock_quantity', 'total_stock',
            'is_in_stock', 'attributes', 'variants', 'images',
            'created_at', 'updated_at'
        ]

    def get_attributes(self, obj):
        return obj.get_formatted_attributes()
