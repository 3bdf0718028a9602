from rest_framework import generics, status, permissions
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
import logging

from .filters import LocationFilter, UserFilter
from .mixins import EnvelopeMixin, LocationScopedMixin, envelope
from .models import Location, User
from .permissions import IsAdmin, IsAnyRole, IsManagement
from .serializers import LocationSerializer, LoginSerializer, UserSerializer

logger = logging.getLogger(__name__)

LOCATION_HEADER = OpenApiParameter(
    name='X-Location-Id', type=OpenApiTypes.UUID, location=OpenApiParameter.HEADER, required=False,
    description='Location context; the location_id query parameter is accepted as well',
)


def issue_tokens(user):
    """Create a refresh/access pair carrying the user's role and location"""
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    refresh['location_id'] = str(user.location_id)
    return refresh


# =============== AUTHENTICATION VIEWS ===============

class LoginView(APIView):
    """
    Exchange email and password for a JWT access/refresh pair.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    serializer_class = LoginSerializer
    www_authenticate_realm = 'api'

    def get_authenticate_header(self, request):
        # Keeps credential failures at 401 without any authentication class
        return f'Bearer realm="{self.www_authenticate_realm}"'

    @extend_schema(
        summary="User Login with JWT Token",
        description="""
        Authenticate with email and password.
        - location_id narrows the lookup when the same email exists at several locations
        - A wrong password is always reported as invalid credentials
        - Inactive or suspended accounts are refused after the password is verified
        """,
        request=LoginSerializer,
        responses={
            200: {
                'type': 'object',
                'properties': {
                    'success': {'type': 'boolean'},
                    'data': {
                        'type': 'object',
                        'properties': {
                            'user': {'type': 'object', 'description': 'User information'},
                            'token': {'type': 'string', 'description': 'JWT access token'},
                            'refresh': {'type': 'string', 'description': 'JWT refresh token'},
                        },
                    },
                },
            },
            401: {'description': 'Invalid credentials or inactive account'},
        },
        examples=[
            OpenApiExample(
                'Login',
                value={"email": "manager@thrive.lk", "password": "SecurePassword123!"},
            )
        ],
    )
    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        refresh = issue_tokens(user)
        logger.info(f"User {user.email} logged in at location {user.location_id}")

        return envelope({
            'user': UserSerializer(user).data,
            'token': str(refresh.access_token),
            'refresh': str(refresh),
        })


class RefreshView(TokenRefreshView):
    """
    Exchange a refresh token for a new access token.
    """

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        return envelope(response.data, status_code=response.status_code)


class MeView(APIView):
    """
    get: The authenticated user
    """
    permission_classes = [IsAnyRole]

    @extend_schema(responses=UserSerializer)
    def get(self, request):
        return envelope(UserSerializer(request.user).data)


# =============== USER MANAGEMENT ===============

@extend_schema(parameters=[LOCATION_HEADER])
class UserListCreateView(EnvelopeMixin, LocationScopedMixin, generics.ListCreateAPIView):
    """
    get: List the users of a location
    post: Create a user (password is hashed)
    """
    resource_name = 'User'
    serializer_class = UserSerializer
    permission_classes = [IsManagement]
    filterset_class = UserFilter

    def get_queryset(self):
        queryset = User.objects.select_related('location').order_by('-created_at')
        if self.request.method == 'GET':
            queryset = queryset.filter(location_id=self.get_location_id())
        return queryset


class UserDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get user details
    put/patch: Update a user (password is re-hashed when supplied)
    delete: Delete a user
    """
    resource_name = 'User'
    queryset = User.objects.select_related('location')
    serializer_class = UserSerializer
    permission_classes = [IsManagement]


# =============== LOCATIONS ===============

class LocationListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    """
    get: List locations
    post: Create a location (admins only)
    """
    resource_name = 'Location'
    queryset = Location.objects.order_by('-created_at')
    serializer_class = LocationSerializer
    filterset_class = LocationFilter

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAdmin()]
        return [IsAnyRole()]


class LocationDetailView(EnvelopeMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get location details
    put/patch: Update a location (admins only)
    delete: Delete a location and everything scoped to it (admins only)
    """
    resource_name = 'Location'
    queryset = Location.objects.all()
    serializer_class = LocationSerializer

    def get_permissions(self):
        if self.request.method in ['PUT', 'PATCH', 'DELETE']:
            return [IsAdmin()]
        return [IsAnyRole()]

    def perform_destroy(self, instance):
        logger.info(f"Deleting location {instance.pk} ({instance.name}) by {self.request.user.email}")
        instance.delete()
