import logging

from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from django.db import IntegrityError, transaction
from django.db.models import Prefetch

from apps.catalog.models import (
    Attribute,
    AttributeValue,
    Product,
    ProductImage,
    ProductVariant,
)
from apps.catalog.services import (
    ProductVariantService,
    VariantCombinationLimitExceeded,
    images_for_selection,
)
from .serializers import (
    AttributeSerializer,
    AttributeValueSerializer,
    ProductAttributeSyncSerializer,
    ProductDetailSerializer,
    ProductImageSerializer,
    ProductListSerializer,
    ProductSerializer,
    ProductVariantSerializer,
    VariantSyncResultSerializer,
)
from .filters import ProductFilter, ProductImageFilter, ProductVariantFilter

logger = logging.getLogger(__name__)


def parse_selection(raw_pairs):
    """
    Parse ``attribute_id:attribute_value_id`` strings into integer pairs.

    Raises:
        ValueError: when a pair is malformed
    """
    pairs = []
    for raw in raw_pairs:
        for chunk in raw.split(','):
            chunk = chunk.strip()
            if not chunk:
                continue
            attribute_id, sep, attribute_value_id = chunk.partition(':')
            if not sep:
                raise ValueError(f"Invalid selection pair '{chunk}'")
            pairs.append((int(attribute_id), int(attribute_value_id)))
    return pairs


class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for products.

    list: List all products
    retrieve: Get product detail with selections, variants and images
    generate_variants: Reconcile variants with the current selections
    sync_attributes: Replace selections and reconcile variants
    images: Images for an attribute selection
    """
    queryset = Product.objects.all()
    lookup_field = 'slug'
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'sku', 'description']
    ordering_fields = ['name', 'base_price', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        elif self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                Prefetch(
                    'variants',
                    queryset=ProductVariant.objects.prefetch_related(
                        'variant_attributes__attribute',
                        'variant_attributes__attribute_value__attribute',
                    )
                ),
                'images'
            )
        return queryset

    def perform_update(self, serializer):
        with transaction.atomic():
            product = serializer.save()
            if product.is_simple and product.variants.exists():
                # Simple products never keep variants
                product.variants.all().delete()

    def _generate_variants(self, product, attributes_data=None):
        """Optionally replace selections, then reconcile variants, atomically."""
        try:
            with transaction.atomic():
                if attributes_data is not None:
                    product.sync_attributes(attributes_data)
                result = ProductVariantService.generate(product)
        except VariantCombinationLimitExceeded as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except IntegrityError as e:
            logger.warning("Variant generation failed for product %s: %s", product.pk, e)
            return Response(
                {'error': f"Conflito de SKU ao gerar variantes: {e}"},
                status=status.HTTP_409_CONFLICT
            )
        serializer = VariantSyncResultSerializer(result, context=self.get_serializer_context())
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def generate_variants(self, request, slug=None):
        """Create missing variants and delete obsolete ones."""
        product = self.get_object()
        if not product.is_variable:
            return Response(
                {'error': 'Apenas produtos variáveis possuem variantes'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return self._generate_variants(product)

    @action(detail=True, methods=['post'])
    def sync_attributes(self, request, slug=None):
        """
        Replace the product's attribute selections and regenerate variants.

        Expected payload:
        {
            "attributes": [
                {"attribute_id": 1, "attribute_value_ids": [3, 4]},
                {"attribute_id": 2, "attribute_value_ids": [7]}
            ]
        }
        """
        product = self.get_object()
        if not product.is_variable:
            return Response(
                {'error': 'Apenas produtos variáveis possuem atributos'},
                status=status.HTTP_400_BAD_REQUEST
            )

        serializer = ProductAttributeSyncSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._generate_variants(product, serializer.get_attributes_data())

    @action(detail=True, methods=['get'])
    def images(self, request, slug=None):
        """
        Images to display for an attribute selection.

        Query params:
        - selection: attribute_id:attribute_value_id, repeatable
          (e.g. ?selection=1:3&selection=2:7 or ?selection=1:3,2:7)
        """
        product = self.get_object()
        try:
            selection = parse_selection(request.query_params.getlist('selection'))
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        images = images_for_selection(product.images.all(), selection)
        serializer = ProductImageSerializer(
            images, many=True, context=self.get_serializer_context()
        )
        return Response(serializer.data)


class AttributeViewSet(viewsets.ModelViewSet):
    """
    API endpoint for attributes (Color, Size, Storage, etc).
    """
    queryset = Attribute.objects.prefetch_related('values')
    serializer_class = AttributeSerializer
    lookup_field = 'slug'
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['sort_order', 'name']


class AttributeValueViewSet(viewsets.ModelViewSet):
    """
    API endpoint for attribute values.
    """
    queryset = AttributeValue.objects.select_related('attribute')
    serializer_class = AttributeValueSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['attribute', 'attribute__slug']
    search_fields = ['value']


class ProductVariantViewSet(viewsets.ModelViewSet):
    """
    API endpoint for variants.

    Variants are created and deleted by variant generation; this endpoint
    edits their SKU, price override and stock.
    """
    queryset = ProductVariant.objects.select_related('product').prefetch_related(
        'variant_attributes__attribute', 'variant_attributes__attribute_value__attribute'
    )
    serializer_class = ProductVariantSerializer
    http_method_names = ['get', 'put', 'patch', 'post', 'head', 'options']
    filterset_class = ProductVariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['sku', 'product__name']
    ordering_fields = ['sku', 'price_override', 'stock_quantity', 'created_at']
    ordering = ['sku']

    def create(self, request, *args, **kwargs):
        return Response(
            {'error': 'Variantes são criadas pela geração de variantes do produto'},
            status=status.HTTP_405_METHOD_NOT_ALLOWED
        )

    @action(detail=False, methods=['post'])
    def bulk_update_stock(self, request):
        """
        Bulk update variant stock quantities.

        Expected payload:
        {
            "updates": [
                {"id": 1, "stock_quantity": 100},
                {"id": 2, "stock_quantity": 50}
            ]
        }
        """
        updates = request.data.get('updates', []) if isinstance(request.data, dict) else None
        if not isinstance(updates, list):
            return Response(
                {'error': '"updates" deve ser uma lista'},
                status=status.HTTP_400_BAD_REQUEST
            )
        updated_ids = []
        errors = []

        with transaction.atomic():
            for update in updates:
                if not isinstance(update, dict):
                    errors.append(f"Atualização inválida: {update!r}")
                    continue

                variant_id = update.get('id')
                stock = update.get('stock_quantity')

                if not variant_id or stock is None:
                    continue
                try:
                    variant_id = int(variant_id)
                    stock = int(stock)
                except (TypeError, ValueError):
                    errors.append(f"Dados inválidos para a variante {variant_id!r}")
                    continue
                if stock < 0:
                    errors.append(f"Estoque negativo para a variante {variant_id}")
                    continue

                variant = ProductVariant.objects.filter(pk=variant_id).first()
                if variant is None:
                    errors.append(f"Variante {variant_id} não encontrada")
                    continue

                # save() so the change lands in the variant history
                variant.stock_quantity = stock
                variant.save(update_fields=['stock_quantity', 'updated_at'])
                updated_ids.append(variant_id)

        return Response({'updated': len(updated_ids), 'ids': updated_ids, 'errors': errors})


class ProductImageViewSet(viewsets.ModelViewSet):
    """
    API endpoint for product images and their attribute combinations.
    """
    queryset = ProductImage.objects.select_related('product')
    serializer_class = ProductImageSerializer
    filterset_class = ProductImageFilter
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    ordering = ['product', 'sort_order', 'id']
