"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from apps.catalog.models import (
    Attribute,
    AttributeValue,
    Product,
    ProductAttribute,
)


@pytest.fixture
def color(db):
    """Color attribute with Red and Blue."""
    attribute = Attribute.objects.create(
        name='Color', type=Attribute.TYPE_COLOR, sort_order=1
    )
    AttributeValue.objects.create(attribute=attribute, value='red', hex='#FF0000', sort_order=1)
    AttributeValue.objects.create(attribute=attribute, value='blue', hex='#0000FF', sort_order=2)
    return attribute


@pytest.fixture
def size(db):
    """Size attribute with S and M."""
    attribute = Attribute.objects.create(
        name='Size', type=Attribute.TYPE_SIZE, sort_order=2
    )
    AttributeValue.objects.create(attribute=attribute, value='S', sort_order=1)
    AttributeValue.objects.create(attribute=attribute, value='M', sort_order=2)
    return attribute


@pytest.fixture
def red(color):
    return color.values.get(value='red')


@pytest.fixture
def blue(color):
    return color.values.get(value='blue')


@pytest.fixture
def small(size):
    return size.values.get(value='S')


@pytest.fixture
def medium(size):
    return size.values.get(value='M')


@pytest.fixture
def shirt(db, red, blue, small, medium):
    """Variable product offering Red/Blue x S/M, without variants yet."""
    product = Product.objects.create(
        name='T-Shirt',
        sku='TSHIRT',
        base_price=Decimal('49.90'),
        product_type=Product.TYPE_VARIABLE,
    )
    for value in (red, blue, small, medium):
        ProductAttribute.objects.create(product=product, attribute_value=value)
    return product


@pytest.fixture
def simple_product(db):
    return Product.objects.create(
        name='Mug',
        sku='MUG',
        base_price=Decimal('19.90'),
        stock_quantity=5,
    )


@pytest.fixture
def staff_user(db, django_user_model):
    return django_user_model.objects.create_user(
        username='staff', password='staff123', is_staff=True
    )


@pytest.fixture
def api_client(staff_user):
    """API client authenticated as a staff user."""
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client
