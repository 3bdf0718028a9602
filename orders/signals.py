# Signals that keep Customer.total_preps equal to the number of orders referencing the customer
from django.db.models import F
from django.db.models.signals import pre_save, post_save, post_delete
from django.dispatch import receiver
import logging

from .models import Customer, Order

logger = logging.getLogger(__name__)


def _adjust_preps(customer_id, delta):
    if customer_id:
        Customer.objects.filter(pk=customer_id).update(total_preps=F('total_preps') + delta)


@receiver(pre_save, sender=Order)
def remember_previous_customer(sender, instance, **kwargs):
    """Record which customer the stored order points at before it is overwritten"""
    update_fields = kwargs.get('update_fields')
    if instance._state.adding or (update_fields is not None and not {'customer', 'customer_id'} & set(update_fields)):
        instance._previous_customer_id = None if instance._state.adding else instance.customer_id
        return
    instance._previous_customer_id = (
        Order.objects.filter(pk=instance.pk).values_list('customer_id', flat=True).first()
    )


@receiver(post_save, sender=Order)
def count_order_for_customer(sender, instance, created, **kwargs):
    """Add one prep for a new order; move it when the order changes customer"""
    if created:
        _adjust_preps(instance.customer_id, 1)
        return

    previous = getattr(instance, '_previous_customer_id', None)
    if previous != instance.customer_id:
        logger.info(f"Order {instance.order_number} moved from customer {previous} to {instance.customer_id}")
        _adjust_preps(previous, -1)
        _adjust_preps(instance.customer_id, 1)


@receiver(post_delete, sender=Order)
def uncount_deleted_order(sender, instance, **kwargs):
    """Remove one prep when an order is deleted"""
    _adjust_preps(instance.customer_id, -1)
