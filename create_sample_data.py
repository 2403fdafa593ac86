"""
Script to create sample data for the catalog admin.
Run with: python manage.py shell < create_sample_data.py
"""
from decimal import Decimal
from io import BytesIO

from django.core.files.base import ContentFile
from PIL import Image

from apps.catalog.models import (
    Attribute,
    AttributeValue,
    Product,
    ProductAttribute,
    ProductImage,
    ProductVariant,
)
from apps.catalog.services import ProductVariantService


def placeholder_image(hex_color):
    buffer = BytesIO()
    Image.new('RGB', (600, 600), hex_color).save(buffer, format='JPEG')
    return ContentFile(buffer.getvalue())


# Create Attributes
print("Creating attributes...")

color, _ = Attribute.objects.get_or_create(
    slug='color',
    defaults={'name': 'Cor', 'type': Attribute.TYPE_COLOR, 'is_required': True, 'sort_order': 1}
)

size, _ = Attribute.objects.get_or_create(
    slug='size',
    defaults={'name': 'Tamanho', 'type': Attribute.TYPE_SIZE, 'sort_order': 2}
)

storage, _ = Attribute.objects.get_or_create(
    slug='storage',
    defaults={'name': 'Armazenamento', 'type': Attribute.TYPE_DROPDOWN, 'sort_order': 3}
)

# Create Attribute Values
print("Creating attribute values...")

colors = ['preto', 'branco', 'azul', 'vermelho', 'verde']
color_hexes = ['#000000', '#FFFFFF', '#0000FF', '#FF0000', '#00FF00']

for i, (c, h) in enumerate(zip(colors, color_hexes)):
    AttributeValue.objects.get_or_create(
        attribute=color,
        value=c,
        defaults={'hex': h, 'sort_order': i}
    )

sizes = ['P', 'M', 'G', 'GG', 'XGG', 'XXGG']
for i, s in enumerate(sizes):
    AttributeValue.objects.get_or_create(
        attribute=size,
        value=s,
        defaults={'sort_order': i}
    )

storages = ['64GB', '128GB', '256GB', '512GB', '1TB']
for i, s in enumerate(storages):
    AttributeValue.objects.get_or_create(
        attribute=storage,
        value=s,
        defaults={'sort_order': i}
    )

# Create Products
print("Creating products...")

shirt, _ = Product.objects.get_or_create(
    slug='camiseta-basica',
    defaults={
        'name': 'Camiseta Básica',
        'sku': 'CAM',
        'description': 'Camiseta de algodão confortável',
        'base_price': Decimal('79.90'),
        'product_type': Product.TYPE_VARIABLE,
    }
)

phone, _ = Product.objects.get_or_create(
    slug='smartphone-x',
    defaults={
        'name': 'Smartphone X',
        'description': 'Smartphone com várias cores e capacidades',
        'base_price': Decimal('2999.00'),
        'product_type': Product.TYPE_VARIABLE,
    }
)

mug, _ = Product.objects.get_or_create(
    slug='caneca',
    defaults={
        'name': 'Caneca',
        'sku': 'CAN',
        'base_price': Decimal('39.90'),
        'stock_quantity': 25,
    }
)

# Select attribute values
print("Selecting attribute values...")

for value in AttributeValue.objects.filter(attribute=color, value__in=['preto', 'branco', 'azul']):
    ProductAttribute.objects.get_or_create(product=shirt, attribute=color, attribute_value=value)
for value in AttributeValue.objects.filter(attribute=size, value__in=['P', 'M', 'G']):
    ProductAttribute.objects.get_or_create(product=shirt, attribute=size, attribute_value=value)

# 5 colors x 6 sizes would be silly for a phone; 5 colors x 5 storages is enough
for value in AttributeValue.objects.filter(attribute__in=[color, storage]):
    ProductAttribute.objects.get_or_create(
        product=phone, attribute=value.attribute, attribute_value=value
    )

# Generate variants
print("Generating variants...")

for product in (shirt, phone, mug):
    result = ProductVariantService.generate(product)
    print(f"   - {product.name}: {len(result.created)} created, "
          f"{len(result.deleted)} deleted, {len(result.unchanged)} unchanged")

# Give the shirts some stock; regenerating later keeps it
ProductVariant.objects.filter(product=shirt, stock_quantity=0).update(stock_quantity=10)

# Create images
print("Creating images...")

if not shirt.images.exists():
    general = ProductImage(product=shirt, sort_order=0, is_primary=True)
    general.image.save('camiseta.jpg', placeholder_image('#CCCCCC'), save=False)
    general.save()

    for i, value in enumerate(AttributeValue.objects.filter(attribute=color, value__in=['preto', 'azul']), start=1):
        image = ProductImage(
            product=shirt,
            sort_order=i,
            attribute_combination=[
                {'attribute_id': color.id, 'attribute_value_id': value.id}
            ],
        )
        image.image.save(f'camiseta-{value.value}.jpg', placeholder_image(value.hex), save=False)
        image.save()

print("\n✅ Sample data created successfully!")
print(f"   - {Product.objects.count()} products")
print(f"   - {ProductVariant.objects.count()} variants")
print(f"   - {Attribute.objects.count()} attributes")
print(f"   - {AttributeValue.objects.count()} attribute values")
print(f"   - {ProductImage.objects.count()} images")
print("\nAccess the admin at: http://localhost:8000/admin/")
