from rest_framework import serializers
from django.contrib.auth import authenticate
import logging

from .exceptions import InvalidCredentials, AccountInactive
from .mixins import LocationScopedMixin
from .models import Location, User

logger = logging.getLogger(__name__)


class LocationScopedSerializerMixin:
    """
    Fills a missing location on create from the request location
    (X-Location-Id header or location_id query parameter).
    """

    def resolve_location(self, attrs):
        if self.instance is not None:
            # A record never moves between locations
            attrs.pop('location', None)
            return attrs

        if attrs.get('location') is None:
            location_id = self.context.get('location_id')
            location = None
            if location_id:
                location_id = LocationScopedMixin.parse_location_id(location_id)
                location = Location.objects.filter(pk=location_id).first()
            if location is None:
                raise serializers.ValidationError({'location_id': ['This field is required.']})
            attrs['location'] = location
        return attrs


class LocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = [
            'id', 'name', 'currency', 'location_type', 'address', 'phone',
            'status', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class UserSerializer(LocationScopedSerializerMixin, serializers.ModelSerializer):
    location_id = serializers.PrimaryKeyRelatedField(
        source='location', queryset=Location.objects.all(), required=False
    )
    location_name = serializers.CharField(source='location.name', read_only=True)
    password = serializers.CharField(write_only=True, required=False, min_length=1)

    class Meta:
        model = User
        fields = [
            'id', 'location_id', 'location_name', 'email', 'name', 'contact_number',
            'role', 'account_status', 'password', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # (location, email) uniqueness is reported by the database as a 409
        validators = []

    def validate(self, attrs):
        attrs = self.resolve_location(attrs)
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': ['This field is required.']})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        email = validated_data.pop('email')
        return User.objects.create_user(email, password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        if password:
            instance.set_password(password)

        instance.save()
        return instance


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)
    location_id = serializers.UUIDField(required=False)

    def validate(self, attrs):
        email = attrs.get('email')
        password = attrs.get('password')

        user = authenticate(
            self.context.get('request'),
            email=email,
            password=password,
            location_id=attrs.get('location_id'),
        )
        if not user:
            logger.warning(f"Failed login attempt for {email}")
            raise InvalidCredentials()

        # Status is only revealed to a caller that proved the password
        if user.account_status != 'active':
            logger.warning(f"Login refused for {email}: account is {user.account_status}")
            raise AccountInactive()

        attrs['user'] = user
        return attrs
