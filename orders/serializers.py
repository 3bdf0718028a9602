from rest_framework import serializers
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from decimal import Decimal
import logging

from authentication.exceptions import EmptyOrder
from authentication.models import Location
from authentication.serializers import LocationScopedSerializerMixin
from inventory.models import MenuItem
from .models import Customer, Order, OrderItem

logger = logging.getLogger(__name__)


# =============== CUSTOMERS ===============
class CustomerSerializer(LocationScopedSerializerMixin, serializers.ModelSerializer):
    location_id = serializers.PrimaryKeyRelatedField(
        source='location', queryset=Location.objects.all(), required=False
    )
    location_name = serializers.CharField(source='location.name', read_only=True)

    class Meta:
        model = Customer
        fields = [
            'id', 'location_id', 'location_name', 'email', 'name', 'contact_number',
            'address', 'account_status', 'total_preps', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'total_preps', 'created_at', 'updated_at']
        # (location, email) uniqueness is reported by the database as a 409
        validators = []

    def validate(self, attrs):
        return self.resolve_location(attrs)


class RecentOrderSerializer(serializers.ModelSerializer):
    class Meta:
        model = Order
        fields = ['id', 'order_number', 'status', 'total_price', 'order_date']


class CustomerDetailSerializer(CustomerSerializer):
    recent_orders = serializers.SerializerMethodField()

    class Meta(CustomerSerializer.Meta):
        fields = CustomerSerializer.Meta.fields + ['recent_orders']

    def get_recent_orders(self, obj):
        orders = obj.orders.order_by('-order_date')[:10]
        return RecentOrderSerializer(orders, many=True).data


# =============== ORDERS ===============
class OrderItemSerializer(serializers.ModelSerializer):
    menu_item_id = serializers.UUIDField(read_only=True)
    menu_item_name = serializers.CharField(source='menu_item.name', read_only=True, default=None)

    class Meta:
        model = OrderItem
        fields = [
            'id', 'menu_item_id', 'menu_item_name', 'quantity',
            'unit_price', 'total_price', 'notes', 'created_at'
        ]


class OrderReadSerializer(serializers.ModelSerializer):
    location_id = serializers.UUIDField(read_only=True)
    location_name = serializers.CharField(source='location.name', read_only=True)
    customer_id = serializers.UUIDField(read_only=True)
    customer_name = serializers.CharField(source='customer.name', read_only=True, default=None)
    customer_email = serializers.CharField(source='customer.email', read_only=True, default=None)
    customer_phone = serializers.CharField(source='customer.contact_number', read_only=True, default=None)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'location_id', 'location_name',
            'customer_id', 'customer_name', 'customer_email', 'customer_phone', 'status',
            'total_price', 'notes', 'order_date', 'delivered_at',
            'items', 'created_at', 'updated_at'
        ]


class OrderItemCreateSerializer(serializers.Serializer):
    menu_item_id = serializers.PrimaryKeyRelatedField(
        source='menu_item', queryset=MenuItem.objects.all(), required=False, allow_null=True
    )
    quantity = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=1)
    unit_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True, default=Decimal('0.00')
    )
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class OrderCreateSerializer(LocationScopedSerializerMixin, serializers.ModelSerializer):
    location_id = serializers.PrimaryKeyRelatedField(
        source='location', queryset=Location.objects.all(), required=False
    )
    customer_id = serializers.PrimaryKeyRelatedField(
        source='customer', queryset=Customer.objects.all(), required=False, allow_null=True
    )
    items = OrderItemCreateSerializer(many=True, required=False)

    class Meta:
        model = Order
        fields = ['id', 'location_id', 'customer_id', 'notes', 'order_date', 'items']
        read_only_fields = ['id']
        extra_kwargs = {'order_date': {'required': False}}

    def validate(self, attrs):
        attrs = self.resolve_location(attrs)
        if not attrs.get('items'):
            raise EmptyOrder()

        location = attrs['location']
        customer = attrs.get('customer')
        if customer is not None and customer.location_id != location.pk:
            raise serializers.ValidationError({'customer_id': ['Customer belongs to another location.']})

        for item in attrs['items']:
            menu_item = item.get('menu_item')
            if menu_item is not None and menu_item.location_id != location.pk:
                raise serializers.ValidationError({'items': [f"Menu item {menu_item.pk} belongs to another location."]})
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        items_data = validated_data.pop('items')

        # Create order; its number comes from the locked location counter
        order = Order.objects.create(**validated_data)

        # Create order items in the same transaction
        for item_data in items_data:
            OrderItem.objects.create(
                order=order,
                menu_item=item_data.get('menu_item'),
                quantity=item_data.get('quantity') or 1,
                unit_price=item_data.get('unit_price') or Decimal('0.00'),
                notes=item_data.get('notes') or None,
            )

        order.calculate_totals()
        order.save(update_fields=['total_price', 'updated_at'])

        logger.info(
            f"Created order {order.order_number} at location {order.location_id} "
            f"with {len(items_data)} items, total {order.total_price}"
        )
        return order


class OrderUpdateSerializer(serializers.ModelSerializer):
    customer_id = serializers.PrimaryKeyRelatedField(
        source='customer', queryset=Customer.objects.all(), required=False, allow_null=True
    )
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES, required=False)

    class Meta:
        model = Order
        fields = ['id', 'customer_id', 'notes', 'status']
        read_only_fields = ['id']

    def validate_customer_id(self, value):
        if value is not None and self.instance is not None and value.location_id != self.instance.location_id:
            raise serializers.ValidationError('Customer belongs to another location.')
        return value

    def update(self, instance, validated_data):
        status = validated_data.pop('status', None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        if status is not None and status != instance.status:
            try:
                instance.apply_status(status)
            except DjangoValidationError as exc:
                raise serializers.ValidationError({'status': exc.messages})
            logger.info(f"Order {instance.order_number} status set to {status}")

        instance.save()
        return instance


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)

    def update(self, instance, validated_data):
        try:
            previous = instance.set_status(validated_data['status'])
        except DjangoValidationError as exc:
            raise serializers.ValidationError({'status': exc.messages})
        logger.info(f"Order {instance.order_number} moved from {previous} to {instance.status}")
        return instance


class OrderStatsSerializer(serializers.Serializer):
    preps_received = serializers.IntegerField()
    preps_delivered = serializers.IntegerField()
    total_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    date = serializers.DateField()
