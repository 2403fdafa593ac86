from django.core.exceptions import ValidationError
from django.db import models
from imagekit.models import ProcessedImageField, ImageSpecField
from imagekit.processors import ResizeToFill, ResizeToFit

from .attribute import AttributeValue

PAIR_KEYS = ('attribute_id', 'attribute_value_id')


def _is_id(value):
    return isinstance(value, int) and not isinstance(value, bool)


class ProductImageQuerySet(models.QuerySet):

    def primary(self):
        return self.filter(is_primary=True)

    def general(self):
        return self.filter(attribute_combination__isnull=True)

    def attribute_specific(self):
        return self.filter(attribute_combination__isnull=False)


class ProductImage(models.Model):
    """
    Product image, optionally tagged with the attribute values it shows.

    ``attribute_combination`` is a list of
    ``{"attribute_id": ..., "attribute_value_id": ...}`` pairs. Images without
    a combination are "general" and apply to any selection.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='images',
        verbose_name='Produto'
    )
    image = ProcessedImageField(
        upload_to='products/%Y/%m/',
        processors=[ResizeToFit(1200, 1200)],
        format='JPEG',
        options={'quality': 85},
        verbose_name='Imagem'
    )
    thumbnail = ImageSpecField(
        source='image',
        processors=[ResizeToFill(300, 300)],
        format='JPEG',
        options={'quality': 70}
    )
    thumbnail_small = ImageSpecField(
        source='image',
        processors=[ResizeToFill(100, 100)],
        format='JPEG',
        options={'quality': 60}
    )
    alt_text = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Texto alternativo'
    )
    sort_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )
    is_primary = models.BooleanField(
        default=False,
        verbose_name='Imagem principal'
    )
    attribute_combination = models.JSONField(
        null=True,
        blank=True,
        verbose_name='Combinação de atributos',
        help_text='Vazio para imagens gerais'
    )

    objects = ProductImageQuerySet.as_manager()

    class Meta:
        ordering = ['sort_order', 'id']
        verbose_name = 'Imagem do Produto'
        verbose_name_plural = 'Imagens do Produto'

    def __str__(self):
        return f"{self.product.name} - Imagem {self.sort_order}"

    def clean(self):
        """
        Validate ``attribute_combination``: a list of
        ``{"attribute_id": int, "attribute_value_id": int}`` pairs, each value
        belonging to its attribute, with no attribute repeated.
        """
        combination = self.attribute_combination
        if not combination:
            return

        if not isinstance(combination, list):
            raise ValidationError({
                'attribute_combination': 'A combinação deve ser uma lista de pares atributo/valor.'
            })

        pairs = []
        for item in combination:
            if not isinstance(item, dict) or not all(
                _is_id(item.get(key)) for key in PAIR_KEYS
            ):
                raise ValidationError({
                    'attribute_combination': (
                        'Cada par deve ter "attribute_id" e "attribute_value_id" inteiros.'
                    )
                })
            pairs.append((item['attribute_id'], item['attribute_value_id']))

        attribute_ids = [attribute_id for attribute_id, _ in pairs]
        if len(attribute_ids) != len(set(attribute_ids)):
            raise ValidationError({
                'attribute_combination': 'Cada atributo pode aparecer apenas uma vez na combinação.'
            })

        owners = dict(
            AttributeValue.objects.filter(
                pk__in=[value_id for _, value_id in pairs]
            ).values_list('pk', 'attribute_id')
        )
        for attribute_id, value_id in pairs:
            if owners.get(value_id) != attribute_id:
                raise ValidationError({
                    'attribute_combination': (
                        f"Valor {value_id} não pertence ao atributo {attribute_id}."
                    )
                })

    def save(self, *args, **kwargs):
        # Empty combinations are stored as NULL so general() stays a plain lookup
        if not self.attribute_combination:
            self.attribute_combination = None

        # Ensure only one primary image per product
        if self.is_primary:
            ProductImage.objects.filter(
                product=self.product,
                is_primary=True
            ).exclude(pk=self.pk).update(is_primary=False)

        if not self.alt_text:
            self.alt_text = str(self.product)

        super().save(*args, **kwargs)

    def is_general(self):
        return not self.attribute_combination

    def is_attribute_specific(self):
        return not self.is_general()

    def matches_selection(self, selection):
        from apps.catalog.services.image_matching import matches_selection
        return matches_selection(self, selection)

    def get_attribute_combination_display(self):
        """Human readable combination, e.g. "Color: Red, Size: M"."""
        if self.is_general():
            return 'General'

        from apps.catalog.services.image_matching import combination_pairs

        pairs = combination_pairs(self.attribute_combination)
        values = AttributeValue.objects.select_related('attribute').in_bulk(
            [value_id for _, value_id in pairs]
        )
        parts = []
        for attribute_id, value_id in sorted(pairs):
            value = values.get(value_id)
            if value is not None and value.attribute_id == attribute_id:
                parts.append(f"{value.attribute.name}: {value.value}")
        return ', '.join(parts)
