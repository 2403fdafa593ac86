from django.core.management.base import BaseCommand, CommandError
from django.db import IntegrityError, transaction

from apps.catalog.models import Product
from apps.catalog.services import ProductVariantService, VariantCombinationLimitExceeded


class DryRunRollback(Exception):
    pass


class Command(BaseCommand):
    help = 'Reconcile the variants of variable products with their selected attribute values.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--product',
            action='append',
            dest='slugs',
            default=[],
            help='Slug of a product to process (repeatable). Defaults to every variable product.'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report what would change and roll everything back.'
        )

    def handle(self, *args, **options):
        products = Product.objects.filter(product_type=Product.TYPE_VARIABLE)
        slugs = options['slugs']
        if slugs:
            products = products.filter(slug__in=slugs)
            missing = set(slugs) - set(products.values_list('slug', flat=True))
            if missing:
                raise CommandError(
                    f"Variable products not found: {', '.join(sorted(missing))}"
                )

        dry_run = options['dry_run']
        totals = {'created': 0, 'deleted': 0, 'unchanged': 0}

        try:
            with transaction.atomic():
                for product in products.order_by('pk'):
                    try:
                        result = ProductVariantService.generate(product)
                    except (IntegrityError, VariantCombinationLimitExceeded) as e:
                        raise CommandError(f"{product.slug}: {e}") from e

                    totals['created'] += len(result.created)
                    totals['deleted'] += len(result.deleted)
                    totals['unchanged'] += len(result.unchanged)
                    self.stdout.write(
                        f"{product.slug}: {len(result.created)} created, "
                        f"{len(result.deleted)} deleted, {len(result.unchanged)} unchanged"
                    )

                if dry_run:
                    raise DryRunRollback()
        except DryRunRollback:
            self.stdout.write(self.style.WARNING('Dry run, no changes were saved.'))

        self.stdout.write(self.style.SUCCESS(
            f"Done: {totals['created']} created, {totals['deleted']} deleted, "
            f"{totals['unchanged']} unchanged"
        ))
