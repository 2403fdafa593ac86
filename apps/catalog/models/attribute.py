from django.db import models
from django.core.validators import RegexValidator
from django.utils.text import slugify


class Attribute(models.Model):
    """
    An axis of variation offered by variable products.
    Examples: Color, Size, Storage.
    """
    TYPE_TEXT = 'text'
    TYPE_NUMBER = 'number'
    TYPE_COLOR = 'color'
    TYPE_SIZE = 'size'
    TYPE_DROPDOWN = 'dropdown'

    TYPE_CHOICES = [
        (TYPE_TEXT, 'Texto'),
        (TYPE_NUMBER, 'Número'),
        (TYPE_COLOR, 'Cor'),
        (TYPE_SIZE, 'Tamanho'),
        (TYPE_DROPDOWN, 'Lista'),
    ]

    name = models.CharField(
        max_length=100,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=100,
        unique=True,
        blank=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    type = models.CharField(
        max_length=20,
        choices=TYPE_CHOICES,
        default=TYPE_DROPDOWN,
        verbose_name='Tipo'
    )
    is_required = models.BooleanField(
        default=False,
        verbose_name='Obrigatório',
        help_text='Produtos variáveis devem escolher um valor deste atributo'
    )
    sort_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['sort_order', 'name']
        verbose_name = 'Atributo'
        verbose_name_plural = 'Atributos'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def is_color(self):
        return self.type == self.TYPE_COLOR

    @property
    def value_count(self):
        return self.values.count()


class AttributeValue(models.Model):
    """
    One concrete value on an attribute's axis.

    Examples:
        - Attribute "Color" -> values "Red", "Blue" (with hex swatches)
        - Attribute "Size" -> values "S", "M", "L"
    """
    hex_color_validator = RegexValidator(
        regex=r'^#[0-9A-Fa-f]{6}$',
        message='Cor deve estar no formato hexadecimal (#RRGGBB)'
    )

    attribute = models.ForeignKey(
        Attribute,
        on_delete=models.CASCADE,
        related_name='values',
        verbose_name='Atributo'
    )
    value = models.CharField(
        max_length=100,
        verbose_name='Valor'
    )
    hex = models.CharField(
        max_length=7,
        blank=True,
        validators=[hex_color_validator],
        verbose_name='Cor Hex',
        help_text='Para swatches de cor (#RRGGBB)'
    )
    sort_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['sort_order', 'value']
        unique_together = ['attribute', 'value']
        verbose_name = 'Valor de Atributo'
        verbose_name_plural = 'Valores de Atributos'

    def __str__(self):
        return f"{self.attribute.name}: {self.display_value}"

    @property
    def display_value(self):
        # Color names are stored lowercase by some importers
        if self.attribute.is_color:
            return self.value[:1].upper() + self.value[1:]
        return self.value

    @property
    def is_color(self):
        return bool(self.attribute.is_color and self.hex)

    def get_color_info(self):
        if self.is_color:
            return {'name': self.value, 'hex': self.hex}
        return None
