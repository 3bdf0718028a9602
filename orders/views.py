from rest_framework import generics, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter, inline_serializer
from drf_spectacular.types import OpenApiTypes
import logging

from authentication.exceptions import MissingLocationFilter
from authentication.mixins import EnvelopeMixin, LocationScopedMixin, envelope
from authentication.permissions import IsAnyRole, IsFrontOfHouse, IsManagement
from authentication.views import LOCATION_HEADER
from .filters import CustomerFilter, OrderFilter
from .models import Customer, Order
from .serializers import (
    CustomerSerializer, CustomerDetailSerializer, OrderCreateSerializer, OrderReadSerializer,
    OrderUpdateSerializer, OrderStatusSerializer, OrderStatsSerializer
)

logger = logging.getLogger(__name__)


# =============== CUSTOMERS ===============

class CustomerPermissionMixin:
    """Front of house manages customers; only management deletes them"""

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [IsManagement()]
        return [IsFrontOfHouse()]


@extend_schema(parameters=[LOCATION_HEADER])
class CustomerListCreateView(CustomerPermissionMixin, EnvelopeMixin, LocationScopedMixin, generics.ListCreateAPIView):
    """
    get: List the customers of a location
    post: Create a customer
    """
    resource_name = 'Customer'
    serializer_class = CustomerSerializer
    filterset_class = CustomerFilter

    def get_queryset(self):
        queryset = Customer.objects.select_related('location').order_by('-created_at')
        if self.request.method == 'GET':
            queryset = queryset.filter(location_id=self.get_location_id())
        return queryset


class CustomerDetailView(CustomerPermissionMixin, EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get a customer with their 10 most recent orders
    put/patch: Update a customer
    delete: Delete a customer; their orders are kept without a customer
    """
    resource_name = 'Customer'
    queryset = Customer.objects.select_related('location')
    serializer_class = CustomerSerializer
    read_serializer_class = CustomerDetailSerializer


# =============== ORDERS ===============

def order_queryset():
    return Order.objects.select_related('location', 'customer').prefetch_related('items__menu_item')


@extend_schema(parameters=[LOCATION_HEADER])
class OrderListCreateView(EnvelopeMixin, LocationScopedMixin, generics.ListCreateAPIView):
    """
    get: List the orders of a location with their items
    post: Create an order and all of its items in one transaction
    """
    resource_name = 'Order'
    serializer_class = OrderCreateSerializer
    read_serializer_class = OrderReadSerializer
    filterset_class = OrderFilter

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsFrontOfHouse()]
        return [IsAnyRole()]

    def get_queryset(self):
        queryset = order_queryset().order_by('-order_date')
        if self.request.method == 'GET':
            queryset = queryset.filter(location_id=self.get_location_id())
        return queryset

    def refresh_instance(self, instance):
        return order_queryset().get(pk=instance.pk)


class OrderDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get an order with its items
    put/patch: Update customer, notes or status
    delete: Delete an order and its items
    """
    resource_name = 'Order'
    serializer_class = OrderUpdateSerializer
    read_serializer_class = OrderReadSerializer

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [IsManagement()]
        if self.request.method in ['PUT', 'PATCH']:
            return [IsFrontOfHouse()]
        return [IsAnyRole()]

    def get_queryset(self):
        return order_queryset()

    def refresh_instance(self, instance):
        return order_queryset().get(pk=instance.pk)

    def perform_destroy(self, instance):
        logger.info(f"Deleting order {instance.order_number} at location {instance.location_id}")
        instance.delete()


@extend_schema(
    request=OrderStatusSerializer,
    responses=OrderReadSerializer,
    description="Set an order's status. Moving into delivered stamps delivered_at.",
)
@api_view(['PATCH'])
@permission_classes([IsAnyRole])
def update_order_status(request, pk):
    """Update the status of an order"""
    order = Order.objects.filter(pk=pk).first()
    if order is None:
        raise NotFound('Order not found')
    serializer = OrderStatusSerializer(order, data=request.data)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return envelope(OrderReadSerializer(order_queryset().get(pk=order.pk)).data)


@extend_schema(
    parameters=[
        LOCATION_HEADER,
        OpenApiParameter(name='date', type=OpenApiTypes.DATE, required=False,
                         description='Calendar day in the server time zone; defaults to today'),
    ],
    responses=inline_serializer('OrderStatsEnvelope', fields={
        'success': serializers.BooleanField(),
        'data': OrderStatsSerializer(),
    }),
)
@api_view(['GET'])
@permission_classes([IsAnyRole])
def order_stats(request):
    """Get order statistics for the dashboard"""
    location_id = getattr(request, 'location_id', None)
    if not location_id:
        raise MissingLocationFilter()
    location_id = LocationScopedMixin.parse_location_id(location_id)

    date = timezone.localdate()
    if request.query_params.get('date'):
        date_field = serializers.DateField()
        try:
            date = date_field.to_internal_value(request.query_params['date'])
        except serializers.ValidationError as exc:
            raise serializers.ValidationError({'date': exc.detail})

    stats = Order.objects.stats(location_id, date)
    return envelope(OrderStatsSerializer(stats).data)
