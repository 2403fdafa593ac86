from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify
from simple_history.models import HistoricalRecords


class Product(models.Model):
    """
    Base product model.

    Simple products carry their own stock. Variable products sell through
    their variants, which are generated from the attribute values selected
    in ``product_attributes`` (see ``ProductVariantService``).
    """
    TYPE_SIMPLE = 'simple'
    TYPE_VARIABLE = 'variable'

    TYPE_CHOICES = [
        (TYPE_SIMPLE, 'Simples'),
        (TYPE_VARIABLE, 'Variável'),
    ]

    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Ativo'),
        (STATUS_INACTIVE, 'Inativo'),
    ]

    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        blank=True,
        verbose_name='Slug'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        null=True,
        blank=True,
        verbose_name='SKU',
        help_text='Prefixo dos SKUs gerados para as variantes'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço base'
    )
    product_type = models.CharField(
        max_length=20,
        choices=TYPE_CHOICES,
        default=TYPE_SIMPLE,
        verbose_name='Tipo de produto'
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
        verbose_name='Status'
    )
    stock_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name='Quantidade em estoque',
        help_text='Usado apenas por produtos simples'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['name']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        # Empty SKUs would collide on the unique index
        if not self.sku:
            self.sku = None
        super().save(*args, **kwargs)

    @property
    def is_variable(self):
        return self.product_type == self.TYPE_VARIABLE

    @property
    def is_simple(self):
        return self.product_type == self.TYPE_SIMPLE

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def total_stock(self):
        if self.is_variable:
            result = self.variants.aggregate(total=models.Sum('stock_quantity'))
            return result['total'] or 0
        return self.stock_quantity

    @property
    def is_in_stock(self):
        if self.is_variable:
            return self.variants.filter(stock_quantity__gt=0).exists()
        return self.stock_quantity > 0

    def get_selected_attribute_values(self):
        """
        Return the selected attribute values grouped by attribute id.

        Example:
            {1: [{'attribute_id': 1, 'attribute_name': 'Color',
                  'attribute_value_id': 3, 'attribute_value': 'red',
                  'attribute_value_hex': '#FF0000'}, ...]}
        """
        grouped = {}
        selections = self.product_attributes.select_related(
            'attribute', 'attribute_value'
        ).order_by(
            'attribute__sort_order', 'attribute_id',
            'attribute_value__sort_order', 'attribute_value_id'
        )
        for selection in selections:
            grouped.setdefault(selection.attribute_id, []).append({
                'attribute_id': selection.attribute_id,
                'attribute_name': selection.attribute.name,
                'attribute_value_id': selection.attribute_value_id,
                'attribute_value': selection.attribute_value.value,
                'attribute_value_hex': selection.attribute_value.hex,
            })
        return grouped

    def get_formatted_attributes(self):
        """Selections as ``[{'attribute_id': ..., 'attribute_value_ids': [...]}]``."""
        return [
            {
                'attribute_id': attribute_id,
                'attribute_value_ids': [v['attribute_value_id'] for v in values],
            }
            for attribute_id, values in self.get_selected_attribute_values().items()
        ]

    def sync_attributes(self, attributes_data):
        """
        Replace this product's attribute selections.

        ``attributes_data`` maps attribute id -> iterable of attribute value ids.
        Variants are not touched; run ``ProductVariantService.generate`` after
        this, inside the same transaction.
        """
        self.product_attributes.all().delete()
        ProductAttribute.objects.bulk_create([
            ProductAttribute(
                product=self,
                attribute_id=attribute_id,
                attribute_value_id=attribute_value_id,
            )
            for attribute_id, attribute_value_ids in attributes_data.items()
            for attribute_value_id in dict.fromkeys(attribute_value_ids)
        ])

    def get_images_for_selection(self, selection=None):
        """Images to show for the given attribute selection."""
        from apps.catalog.services.image_matching import images_for_selection
        return images_for_selection(list(self.images.all()), selection or [])


class ProductAttribute(models.Model):
    """
    Records that a product offers a given value on a given attribute axis.
    A product may select several values per axis (e.g. both Red and Blue).
    """
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='product_attributes',
        verbose_name='Produto'
    )
    attribute = models.ForeignKey(
        'catalog.Attribute',
        on_delete=models.CASCADE,
        related_name='product_attributes',
        verbose_name='Atributo'
    )
    attribute_value = models.ForeignKey(
        'catalog.AttributeValue',
        on_delete=models.CASCADE,
        related_name='product_attributes',
        verbose_name='Valor'
    )

    class Meta:
        ordering = ['product', 'attribute', 'attribute_value']
        unique_together = ['product', 'attribute_value']
        verbose_name = 'Atributo do Produto'
        verbose_name_plural = 'Atributos do Produto'

    def __str__(self):
        return f"{self.product.name} - {self.attribute_value}"

    def clean(self):
        if (
            self.attribute_id and self.attribute_value_id
            and self.attribute_value.attribute_id != self.attribute_id
        ):
            raise ValidationError({
                'attribute_value': 'O valor selecionado não pertence a este atributo.'
            })

    def save(self, *args, **kwargs):
        # The attribute is always the one owning the value
        if self.attribute_value_id and not self.attribute_id:
            self.attribute_id = self.attribute_value.attribute_id
        super().save(*args, **kwargs)
