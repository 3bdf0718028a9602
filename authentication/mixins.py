import uuid

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response

from .exceptions import MissingLocationFilter


def envelope(data=None, status_code=status.HTTP_200_OK, count=None, message=None):
    """Wrap a payload in the {success, data, count, message} response shape"""
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if count is not None:
        body['count'] = count
    if message:
        body['message'] = message
    return Response(body, status=status_code)


class EnvelopeMixin:
    """
    Mixin for generic views that answers with the success envelope.

    Writes go through serializer_class. Lists are rendered with
    read_serializer_class and single objects with detail_serializer_class,
    each falling back to the one before. PUT and PATCH are both partial.
    """
    resource_name = 'Resource'
    read_serializer_class = None
    detail_serializer_class = None

    def get_read_serializer(self, instance, many=False):
        serializer_class = self.read_serializer_class or self.get_serializer_class()
        if not many and self.detail_serializer_class is not None:
            serializer_class = self.detail_serializer_class
        return serializer_class(instance, many=many, context=self.get_serializer_context())

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound(f"{self.resource_name} not found")

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        data = self.get_read_serializer(queryset, many=True).data
        return envelope(data, count=len(data))

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        return envelope(self.get_read_serializer(instance).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        instance = self.refresh_instance(serializer.instance)
        return envelope(self.get_read_serializer(instance).data, status_code=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        instance = self.refresh_instance(serializer.instance)
        return envelope(self.get_read_serializer(instance).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return envelope(message=f"{self.resource_name} deleted successfully")

    def refresh_instance(self, instance):
        """Reload the instance through the view queryset so read-side joins are present"""
        return self.get_queryset().model._default_manager.get(pk=instance.pk)


class LocationScopedMixin:
    """Mixin that reads the request location resolved by LocationMiddleware"""

    @staticmethod
    def parse_location_id(location_id):
        try:
            return uuid.UUID(str(location_id))
        except ValueError:
            raise ValidationError({'location_id': ['Must be a valid UUID.']})

    def get_location_id(self, required=True):
        location_id = getattr(self.request, 'location_id', None)
        if not location_id:
            if required:
                raise MissingLocationFilter()
            return None
        return self.parse_location_id(location_id)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        # Parsed only by serializers that need it as a fallback
        context['location_id'] = getattr(self.request, 'location_id', None)
        return context
