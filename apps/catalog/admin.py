from django.contrib import admin, messages
from django.db import IntegrityError
from django.utils.html import format_html
from import_export import resources, fields
from import_export.widgets import ForeignKeyWidget
from import_export.admin import ImportExportModelAdmin
from adminsortable2.admin import SortableAdminMixin, SortableAdminBase, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import (
    Attribute,
    AttributeValue,
    Product,
    ProductAttribute,
    ProductImage,
    ProductVariant,
    ProductVariantAttribute,
)
from .services import ProductVariantService, VariantCombinationLimitExceeded


# =============================================================================
# Import/Export Resources
# =============================================================================

class ProductVariantResource(resources.ModelResource):
    """
    Resource for exporting variants and importing price/stock updates.
    Variants themselves are only created by variant generation.
    """

    product_name = fields.Field(
        column_name='product_name',
        attribute='product__name',
        readonly=True
    )

    class Meta:
        model = ProductVariant
        import_id_fields = ['sku']
        fields = (
            'sku', 'product_name', 'price_override', 'stock_quantity'
        )
        export_order = fields

    def init_instance(self, row=None):
        raise ValueError(
            f"Variante com SKU '{row.get('sku') if row else ''}' não existe. "
            "Variantes são criadas pela geração de variantes do produto."
        )


class AttributeValueResource(resources.ModelResource):
    """Resource for importing/exporting attribute values."""

    attribute = fields.Field(
        column_name='attribute',
        attribute='attribute',
        widget=ForeignKeyWidget(Attribute, 'name')
    )

    class Meta:
        model = AttributeValue
        import_id_fields = ['attribute', 'value']
        fields = ('attribute', 'value', 'hex', 'sort_order')


# =============================================================================
# Inlines
# =============================================================================

class AttributeValueInline(SortableInlineAdminMixin, admin.TabularInline):
    model = AttributeValue
    extra = 1
    fields = ['value', 'hex', 'sort_order']


class ProductAttributeInline(admin.TabularInline):
    model = ProductAttribute
    extra = 1
    autocomplete_fields = ['attribute', 'attribute_value']
    verbose_name = 'Valor oferecido'
    verbose_name_plural = 'Valores oferecidos (geram as variantes)'


class ProductImageInline(SortableInlineAdminMixin, admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = [
        'image', 'alt_text', 'is_primary', 'attribute_combination',
        'sort_order', 'image_preview'
    ]
    readonly_fields = ['image_preview']

    def image_preview(self, obj):
        if obj.image:
            return format_html(
                '<img src="{}" style="max-height: 50px; max-width: 100px;" />',
                obj.thumbnail_small.url if obj.thumbnail_small else obj.image.url
            )
        return '-'
    image_preview.short_description = 'Preview'


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ['sku', 'combination', 'price_override', 'stock_quantity']
    readonly_fields = ['sku', 'combination']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def combination(self, obj):
        return ' / '.join(
            va.attribute_value.display_value
            for va in obj.variant_attributes.select_related('attribute_value__attribute')
        ) or '-'
    combination.short_description = 'Combinação'


class ProductVariantAttributeInline(admin.TabularInline):
    model = ProductVariantAttribute
    extra = 0
    fields = ['attribute', 'attribute_value']
    readonly_fields = ['attribute', 'attribute_value']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Attribute)
class AttributeAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'slug', 'type', 'is_required', 'value_count']
    list_filter = ['type', 'is_required']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    inlines = [AttributeValueInline]

    def value_count(self, obj):
        return obj.values.count()
    value_count.short_description = 'Valores'


@admin.register(AttributeValue)
class AttributeValueAdmin(ImportExportModelAdmin):
    resource_class = AttributeValueResource
    list_display = ['value', 'attribute', 'color_swatch']
    list_filter = ['attribute']
    search_fields = ['value', 'attribute__name']
    autocomplete_fields = ['attribute']

    def color_swatch(self, obj):
        if obj.hex:
            return format_html(
                '<div style="width: 20px; height: 20px; background-color: {}; '
                'border: 1px solid #ccc; border-radius: 3px;"></div>',
                obj.hex
            )
        return '-'
    color_swatch.short_description = 'Cor'


@admin.register(Product)
class ProductAdmin(SortableAdminBase, SimpleHistoryAdmin):
    list_display = [
        'name', 'sku', 'product_type', 'status', 'base_price',
        'variant_count', 'total_stock', 'created_at'
    ]
    list_filter = ['product_type', 'status', 'created_at']
    search_fields = ['name', 'slug', 'sku', 'description']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['variant_count', 'total_stock', 'created_at', 'updated_at']
    inlines = [ProductAttributeInline, ProductImageInline, ProductVariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'sku', 'description', 'product_type', 'status')
        }),
        ('Preço e estoque', {
            'fields': ('base_price', 'stock_quantity')
        }),
        ('Informações', {
            'fields': ('variant_count', 'total_stock', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['generate_variants']

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        product = form.instance
        if product.is_variable:
            self._generate(request, product)
        elif product.variants.exists():
            # Simple products never keep variants
            product.variants.all().delete()

    def _generate(self, request, product):
        try:
            result = ProductVariantService.generate(product)
        except (IntegrityError, VariantCombinationLimitExceeded) as e:
            self.message_user(
                request,
                f'Não foi possível gerar as variantes de "{product}": {e}',
                level=messages.ERROR
            )
            return None
        if result.has_changes:
            self.message_user(
                request,
                f'"{product}": {len(result.created)} variantes criadas, '
                f'{len(result.deleted)} removidas.'
            )
        return result

    @admin.action(description='Gerar variantes dos produtos selecionados')
    def generate_variants(self, request, queryset):
        count = 0
        for product in queryset.filter(product_type=Product.TYPE_VARIABLE):
            if self._generate(request, product) is not None:
                count += 1
        self.message_user(request, f'Variantes geradas para {count} produtos.')


@admin.register(ProductVariant)
class ProductVariantAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = ProductVariantResource
    list_display = [
        'sku', 'product', 'price_override', 'stock_quantity', 'stock_status'
    ]
    list_filter = ['product']
    list_editable = ['price_override', 'stock_quantity']
    search_fields = ['sku', 'product__name']
    readonly_fields = ['product', 'created_at', 'updated_at']
    inlines = [ProductVariantAttributeInline]
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'sku')
        }),
        ('Preço e estoque', {
            'fields': ('price_override', 'stock_quantity')
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_out_of_stock']

    def has_add_permission(self, request):
        return False

    def stock_status(self, obj):
        if obj.stock_quantity <= 0:
            return format_html('<span style="color: {};">{}</span>', 'red', 'Sem estoque')
        return format_html('<span style="color: {};">{}</span>', 'green', 'Em estoque')
    stock_status.short_description = 'Status Estoque'

    @admin.action(description='Marcar como sem estoque')
    def mark_out_of_stock(self, request, queryset):
        count = queryset.update(stock_quantity=0)
        self.message_user(request, f'{count} variantes atualizadas.')


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Ecommerce Admin'
admin.site.site_title = 'Ecommerce'
admin.site.index_title = 'Painel de Administração'
