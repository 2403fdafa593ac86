from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from apps.catalog.models import (
    Attribute,
    Product,
    ProductAttribute,
    ProductImage,
    ProductVariant,
)
from apps.catalog.services import ProductVariantService


def pair(value):
    return {'attribute_id': value.attribute_id, 'attribute_value_id': value.pk}


@pytest.mark.django_db
class TestAttribute:
    def test_slug_is_generated_from_name(self):
        attribute = Attribute.objects.create(name='Screen Size')
        assert attribute.slug == 'screen-size'

    def test_color_values_are_displayed_capitalized(self, red, small):
        assert red.display_value == 'Red'
        assert small.display_value == 'S'
        assert str(red) == 'Color: Red'

    def test_color_info(self, red, small):
        assert red.get_color_info() == {'name': 'red', 'hex': '#FF0000'}
        assert small.get_color_info() is None


@pytest.mark.django_db
class TestProduct:
    def test_empty_sku_is_stored_as_null(self):
        first = Product.objects.create(name='One', sku='')
        second = Product.objects.create(name='Two', sku='')
        assert first.sku is None
        assert second.sku is None

    def test_selected_values_grouped_by_attribute(self, shirt, color, size, red, blue, small, medium):
        assert shirt.get_formatted_attributes() == [
            {'attribute_id': color.pk, 'attribute_value_ids': [red.pk, blue.pk]},
            {'attribute_id': size.pk, 'attribute_value_ids': [small.pk, medium.pk]},
        ]
        grouped = shirt.get_selected_attribute_values()
        assert grouped[color.pk][0]['attribute_value_hex'] == '#FF0000'

    def test_sync_attributes_replaces_selections(self, shirt, color, size, red, medium):
        shirt.sync_attributes({color.pk: [red.pk, red.pk], size.pk: [medium.pk]})

        assert sorted(
            shirt.product_attributes.values_list('attribute_value_id', flat=True)
        ) == sorted([red.pk, medium.pk])

    def test_sync_attributes_does_not_touch_variants(self, shirt, color, red):
        ProductVariantService.generate(shirt)
        shirt.sync_attributes({color.pk: [red.pk]})
        assert shirt.variants.count() == 4

    def test_stock_of_variable_product_is_sum_of_variants(self, shirt):
        ProductVariantService.generate(shirt)
        assert not shirt.is_in_stock

        ProductVariant.objects.filter(product=shirt).update(stock_quantity=3)
        assert shirt.total_stock == 12
        assert shirt.is_in_stock
        assert shirt.variant_count == 4

    def test_stock_of_simple_product(self, simple_product):
        assert simple_product.total_stock == 5
        assert simple_product.is_in_stock


@pytest.mark.django_db
class TestProductAttribute:
    def test_attribute_is_taken_from_value(self, shirt, size):
        xl = size.values.create(value='XL', sort_order=9)
        selection = ProductAttribute.objects.create(product=shirt, attribute_value=xl)
        assert selection.attribute_id == size.pk

    def test_value_must_belong_to_attribute(self, shirt, color, small):
        selection = ProductAttribute(product=shirt, attribute=color, attribute_value=small)
        with pytest.raises(ValidationError):
            selection.clean()


@pytest.mark.django_db
class TestProductVariant:
    def test_price_falls_back_to_base_price(self, shirt):
        ProductVariantService.generate(shirt)
        variant = shirt.variants.get(sku='TSHIRT-red-s')
        assert variant.price == Decimal('49.90')

        variant.price_override = Decimal('10.00')
        assert variant.price == Decimal('10.00')

    def test_display_name_and_options(self, shirt, red, small):
        ProductVariantService.generate(shirt)
        variant = shirt.variants.get(sku='TSHIRT-red-s')

        assert variant.get_display_name() == 'T-Shirt - Red / S'
        assert variant.get_options_dict() == {'color': 'red', 'size': 'S'}
        assert variant.signature == tuple(sorted([red.pk, small.pk]))


@pytest.mark.django_db
class TestProductImage:
    def test_only_one_primary_image(self, shirt):
        first = ProductImage.objects.create(product=shirt, image='products/a.jpg', is_primary=True)
        second = ProductImage.objects.create(product=shirt, image='products/b.jpg', is_primary=True)

        first.refresh_from_db()
        assert not first.is_primary
        assert second.is_primary
        assert list(shirt.images.primary()) == [second]

    def test_alt_text_defaults_to_product_name(self, shirt):
        img = ProductImage.objects.create(product=shirt, image='products/a.jpg')
        assert img.alt_text == 'T-Shirt'

    def test_empty_combination_is_general(self, shirt, red):
        general = ProductImage.objects.create(
            product=shirt, image='products/a.jpg', attribute_combination=[]
        )
        tagged = ProductImage.objects.create(
            product=shirt, image='products/b.jpg', attribute_combination=[pair(red)]
        )

        general.refresh_from_db()
        assert general.attribute_combination is None
        assert list(ProductImage.objects.general()) == [general]
        assert list(ProductImage.objects.attribute_specific()) == [tagged]

    @pytest.mark.parametrize('combination', [
        [{'attribute_id': 1}],
        [1, 2],
        {'attribute_id': 1, 'attribute_value_id': 2},
        [{'attribute_id': '1', 'attribute_value_id': 2}],
    ])
    def test_clean_rejects_malformed_combination(self, shirt, combination):
        img = ProductImage(product=shirt, image='products/a.jpg', attribute_combination=combination)
        with pytest.raises(ValidationError):
            img.full_clean()

    def test_clean_rejects_value_of_another_attribute(self, shirt, color, small):
        img = ProductImage(
            product=shirt, image='products/a.jpg',
            attribute_combination=[{'attribute_id': color.pk, 'attribute_value_id': small.pk}]
        )
        with pytest.raises(ValidationError):
            img.full_clean()

    def test_clean_rejects_repeated_attribute(self, shirt, red, blue):
        img = ProductImage(
            product=shirt, image='products/a.jpg',
            attribute_combination=[pair(red), pair(blue)]
        )
        with pytest.raises(ValidationError):
            img.full_clean()

    def test_clean_accepts_valid_combination(self, shirt, red, small):
        img = ProductImage(
            product=shirt, image='products/a.jpg',
            attribute_combination=[pair(red), pair(small)]
        )
        img.full_clean()

        img.attribute_combination = None
        img.full_clean()

    def test_combination_display(self, shirt, red, small):
        general = ProductImage.objects.create(product=shirt, image='products/a.jpg')
        tagged = ProductImage.objects.create(
            product=shirt, image='products/b.jpg',
            attribute_combination=[pair(small), pair(red)]
        )

        assert general.get_attribute_combination_display() == 'General'
        assert tagged.get_attribute_combination_display() == 'Color: red, Size: S'

    def test_images_for_selection(self, shirt, color, red, blue, small):
        front = ProductImage.objects.create(product=shirt, image='products/front.jpg', sort_order=0)
        red_image = ProductImage.objects.create(
            product=shirt, image='products/red.jpg', sort_order=1,
            attribute_combination=[pair(red)]
        )

        assert shirt.get_images_for_selection() == [front]
        assert shirt.get_images_for_selection([(color.pk, red.pk), (small.attribute_id, small.pk)]) == [red_image]
        assert shirt.get_images_for_selection([(color.pk, blue.pk)]) == [front]
        assert red_image.matches_selection([(color.pk, red.pk)])
        assert not red_image.matches_selection([(color.pk, blue.pk)])
