from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Count, Q, Sum
from django.utils import timezone
from decimal import Decimal
import uuid

from authentication.models import Location, TimeStampedModel
from inventory.models import MenuItem


class Customer(TimeStampedModel):
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('suspended', 'Suspended'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    location = models.ForeignKey(Location, on_delete=models.CASCADE, related_name='customers')
    email = models.EmailField(max_length=255)
    name = models.CharField(max_length=255)
    contact_number = models.CharField(max_length=50, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    account_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    # Maintained by the order signals, never written directly
    total_preps = models.IntegerField(default=0, editable=False)

    def __str__(self):
        return f"{self.name} <{self.email}>"

    class Meta:
        db_table = 'customers'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['location', 'email'], name='customers_location_email_unique'),
        ]


class OrderQuerySet(models.QuerySet):
    def stats(self, location_id, date):
        """Same-day counts of received and delivered orders plus delivered earnings"""
        totals = self.filter(location_id=location_id, order_date__date=date).aggregate(
            preps_received=Count('id', filter=Q(status='received')),
            preps_delivered=Count('id', filter=Q(status='delivered')),
            total_earnings=Sum('total_price', filter=Q(status='delivered')),
        )
        totals['total_earnings'] = totals['total_earnings'] or Decimal('0.00')
        totals['date'] = date
        return totals


class Order(TimeStampedModel):
    STATUS_CHOICES = [
        ('received', 'Received'),
        ('preparing', 'Preparing'),
        ('ready', 'Ready'),
        ('delivered', 'Delivered'),
        ('cancelled', 'Cancelled'),
    ]

    # Allowed moves when ORDER_ENFORCE_STATUS_FLOW is on; delivered and cancelled are terminal
    STATUS_TRANSITIONS = {
        'received': ('preparing', 'cancelled'),
        'preparing': ('ready', 'cancelled'),
        'ready': ('delivered', 'cancelled'),
        'delivered': (),
        'cancelled': (),
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    location = models.ForeignKey(Location, on_delete=models.CASCADE, related_name='orders')
    customer = models.ForeignKey(Customer, on_delete=models.SET_NULL, null=True, blank=True, related_name='orders')
    order_number = models.CharField(max_length=50, editable=False)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='received')
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    notes = models.TextField(null=True, blank=True)
    order_date = models.DateTimeField(default=timezone.now)
    delivered_at = models.DateTimeField(null=True, blank=True)

    objects = OrderQuerySet.as_manager()

    def save(self, *args, **kwargs):
        # Order numbers come from the location counter and are never reused
        if self._state.adding and not self.order_number:
            number = Location.objects.next_sequence(self.location_id, 'order_sequence')
            self.order_number = f"ORD-{number:05d}"
        super().save(*args, **kwargs)

    def calculate_totals(self):
        """Recalculate the order total from its items"""
        self.total_price = sum((item.total_price for item in self.items.all()), Decimal('0.00'))
        return self.total_price

    def check_transition(self, new_status):
        if new_status not in dict(self.STATUS_CHOICES):
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(dict(self.STATUS_CHOICES))}")
        if not getattr(settings, 'ORDER_ENFORCE_STATUS_FLOW', False) or new_status == self.status:
            return
        if new_status not in self.STATUS_TRANSITIONS[self.status]:
            raise ValidationError(f"Cannot move order from {self.status} to {new_status}")

    def apply_status(self, new_status):
        """Set the status in memory, stamping delivered_at on every move into delivered"""
        self.check_transition(new_status)
        self.status = new_status
        if new_status == 'delivered':
            self.delivered_at = timezone.now()

    def set_status(self, new_status):
        previous = self.status
        self.apply_status(new_status)
        self.save(update_fields=['status', 'delivered_at', 'updated_at'])
        return previous

    def __str__(self):
        return f"{self.order_number} - {self.status}"

    class Meta:
        db_table = 'orders'
        ordering = ['-order_date']
        constraints = [
            models.UniqueConstraint(fields=['location', 'order_number'], name='orders_location_number_unique'),
        ]
        indexes = [
            models.Index(fields=['location', 'order_date'], name='orders_location_date'),
            models.Index(fields=['status'], name='orders_status'),
        ]


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, related_name='items', on_delete=models.CASCADE)
    menu_item = models.ForeignKey(MenuItem, on_delete=models.SET_NULL, null=True, blank=True, related_name='order_items')
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def save(self, *args, **kwargs):
        # Line total always follows unit price and quantity
        self.unit_price = round(Decimal(self.unit_price), 2)
        self.total_price = self.unit_price * self.quantity
        super().save(*args, **kwargs)

    def __str__(self):
        name = self.menu_item.name if self.menu_item else 'Item'
        return f"{self.quantity} x {name}"

    class Meta:
        db_table = 'order_items'
        ordering = ['created_at']
