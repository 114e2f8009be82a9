"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from membership.models import Discount, PricingConfig
from membership.stores.django_store import DISCOUNTS_CACHE_KEY, PRICING_CONFIG_CACHE_KEY


@receiver([post_save, post_delete], sender=PricingConfig)
def invalidate_pricing_config_cache(sender, instance, **kwargs):
    """Invalidate the cached price list when the config is saved or deleted."""
    cache.delete(PRICING_CONFIG_CACHE_KEY)


@receiver([post_save, post_delete], sender=Discount)
def invalidate_discount_cache(sender, instance, **kwargs):
    """Invalidate cached discounts when a discount is saved or deleted."""
    cache.delete(DISCOUNTS_CACHE_KEY)
