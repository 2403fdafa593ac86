from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.catalog.models import Product, ProductAttribute, ProductVariant


def run(*args):
    out = StringIO()
    call_command('generate_variants', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestGenerateVariantsCommand:
    def test_generates_for_every_variable_product(self, shirt, simple_product, red):
        cap = Product.objects.create(name='Cap', product_type=Product.TYPE_VARIABLE)
        ProductAttribute.objects.create(product=cap, attribute_value=red)

        output = run()

        assert shirt.variants.count() == 4
        assert cap.variants.count() == 1
        assert simple_product.variants.count() == 0
        assert 't-shirt: 4 created, 0 deleted, 0 unchanged' in output
        assert 'Done: 5 created, 0 deleted, 0 unchanged' in output

    def test_limit_to_one_product(self, shirt, red):
        cap = Product.objects.create(name='Cap', product_type=Product.TYPE_VARIABLE)
        ProductAttribute.objects.create(product=cap, attribute_value=red)

        run('--product', 'cap')

        assert cap.variants.count() == 1
        assert shirt.variants.count() == 0

    def test_unknown_product(self, shirt):
        with pytest.raises(CommandError):
            run('--product', 'missing')

    def test_dry_run_saves_nothing(self, shirt):
        output = run('--dry-run')

        assert 't-shirt: 4 created' in output
        assert 'Dry run' in output
        assert ProductVariant.objects.count() == 0

    def test_second_run_reports_unchanged(self, shirt):
        run()
        output = run()

        assert 'Done: 0 created, 0 deleted, 4 unchanged' in output

    def test_limit_error_is_reported(self, shirt, settings):
        settings.CATALOG_MAX_VARIANT_COMBINATIONS = 1

        with pytest.raises(CommandError):
            run()

        assert shirt.variants.count() == 0
