from rest_framework import generics, status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView
from django.db import connection
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiExample

from . import services
from .models import CustomUser
from .permissions import IsAdminRole
from .serializers import (
    UserSerializer, RegisterSerializer, LoginSerializer,
    RoleSerializer, UserRoleUpdateSerializer
)

# =============== AUTHENTICATION VIEWS ===============

class CustomTokenObtainPairView(TokenObtainPairView):
    """
    JWT authentication endpoint. The access token carries the user's role.
    """
    serializer_class = LoginSerializer

    @extend_schema(
        summary="User Login with JWT Token",
        description="Authenticate with email and password. Returns a JWT pair and the user profile.",
        request=LoginSerializer,
        responses={
            200: {
                'type': 'object',
                'properties': {
                    'refresh': {'type': 'string', 'description': 'JWT refresh token'},
                    'access': {'type': 'string', 'description': 'JWT access token'},
                    'user': {'type': 'object', 'description': 'User information'},
                }
            },
            401: {'description': 'Invalid credentials'},
        },
        examples=[
            OpenApiExample(
                'Customer Login',
                value={
                    "email": "customer@coffeeshop.test",
                    "password": "SecurePassword123!"
                }
            )
        ]
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


@extend_schema(
    summary="Register Customer Account",
    description="Create a new account with the `user` role.",
    request=RegisterSerializer,
    responses={201: UserSerializer, 400: {'description': 'Validation errors'}},
)
@api_view(['POST'])
@permission_classes([permissions.AllowAny])
def register(request):
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class MyProfileView(generics.RetrieveUpdateAPIView):
    """
    Get and update current user's profile information.
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user


# =============== ROLE MANAGEMENT ===============

class RoleListView(generics.ListAPIView):
    """List all roles (admins only)"""
    serializer_class = RoleSerializer
    permission_classes = [IsAdminRole]
    pagination_class = None

    def get_queryset(self):
        return services.list_roles()


class UserRoleListView(generics.ListAPIView):
    """List users with their roles (admins only)"""
    serializer_class = UserSerializer
    permission_classes = [IsAdminRole]

    def get_queryset(self):
        return services.list_users_with_roles(self.request.user)


@extend_schema(
    summary="Change User Role",
    request=UserRoleUpdateSerializer,
    responses={
        200: UserSerializer,
        400: {'description': 'Unknown role'},
        403: {'description': 'Only administrators can change roles'},
        404: {'description': 'User not found'},
    }
)
@api_view(['PATCH'])
@permission_classes([permissions.IsAuthenticated])
def update_user_role(request, user_id):
    serializer = UserRoleUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = services.set_user_role(user_id, serializer.validated_data['role_id'], request.user)
    return Response(UserSerializer(user).data)


# =============== SYSTEM HEALTH ===============

@extend_schema(
    summary="System Health Check",
    description="Check system health and database connectivity",
)
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except Exception as e:
        return Response({
            'status': 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'disconnected',
            'error': str(e)
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return Response({
        'status': 'healthy',
        'timestamp': timezone.now().isoformat(),
        'database': 'connected',
        'users': CustomUser.objects.count(),
    })
