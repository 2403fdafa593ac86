from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
from simple_history.models import HistoricalRecords


class ProductVariant(models.Model):
    """
    One purchasable combination of attribute values of a variable product.

    Rows are written by ``ProductVariantService``; the set of attached
    attribute values is the variant's signature and is unique per product.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )

    # Pricing
    price_override = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço específico',
        help_text='Deixe vazio para usar o preço base do produto'
    )

    # Inventory
    stock_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # Attribute values for this variant
    attribute_values = models.ManyToManyField(
        'catalog.AttributeValue',
        through='ProductVariantAttribute',
        related_name='variants',
        verbose_name='Valores de atributos'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['product', 'sku']
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.sku

    @property
    def price(self):
        if self.price_override is not None:
            return self.price_override
        return self.product.base_price

    @property
    def is_in_stock(self):
        return self.stock_quantity > 0

    @property
    def signature(self):
        """Sorted attribute value ids; equal for equal combinations."""
        return tuple(sorted(
            va.attribute_value_id for va in self.variant_attributes.all()
        ))

    def get_display_name(self):
        """Product name followed by the variant's values, e.g. "Shirt - Red / M"."""
        variant_attributes = sorted(
            self.variant_attributes.select_related('attribute', 'attribute_value'),
            key=lambda va: (va.attribute.sort_order, va.attribute_id)
        )
        if not variant_attributes:
            return f"{self.product.name} - {self.sku}"
        values = ' / '.join(va.attribute_value.display_value for va in variant_attributes)
        return f"{self.product.name} - {values}"

    def get_options_dict(self):
        """Return dict of {attribute_slug: value}"""
        return {
            va.attribute.slug: va.attribute_value.value
            for va in self.variant_attributes.select_related(
                'attribute', 'attribute_value'
            )
        }


class ProductVariantAttribute(models.Model):
    """
    Attaches one attribute value to a variant.
    Each variant has exactly one value per attribute axis.
    """
    variant = models.ForeignKey(
        ProductVariant,
        on_delete=models.CASCADE,
        related_name='variant_attributes',
        verbose_name='Variante'
    )
    attribute = models.ForeignKey(
        'catalog.Attribute',
        on_delete=models.CASCADE,
        related_name='variant_attributes',
        verbose_name='Atributo'
    )
    attribute_value = models.ForeignKey(
        'catalog.AttributeValue',
        on_delete=models.CASCADE,
        related_name='variant_attributes',
        verbose_name='Valor'
    )

    class Meta:
        unique_together = ['variant', 'attribute']
        verbose_name = 'Atributo da Variante'
        verbose_name_plural = 'Atributos das Variantes'

    def __str__(self):
        return f"{self.variant.sku} - {self.attribute_value}"

    def save(self, *args, **kwargs):
        # Ensure only one value per attribute per variant
        existing = ProductVariantAttribute.objects.filter(
            variant=self.variant,
            attribute=self.attribute
        ).exclude(pk=self.pk)

        if existing.exists():
            existing.delete()

        super().save(*args, **kwargs)
