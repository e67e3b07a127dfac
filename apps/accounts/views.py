from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .permissions import IsAdminRole
from .serializers import (
    UserSerializer,
    UserLoginSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
)
from .services import (
    sign_in,
    list_users,
    get_user,
    create_user,
    update_user,
    InvalidCredentialsError,
    InactiveAccountError,
    StoreUnavailableError,
    UserNotFoundError,
    DuplicateUserError,
    InvalidStoreError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = sign_in(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except (InactiveAccountError, StoreUnavailableError) as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    user = get_user(user_id=request.user.id)
    return Response(UserSerializer(user).data)


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer(many=True)},
    description="List all users, newest first.",
    tags=['users'],
)
@extend_schema(
    methods=['POST'],
    request=UserCreateSerializer,
    responses={201: UserSerializer, 400: ErrorResponseSerializer},
    description="Register a user profile with a role and home store.",
    tags=['users'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_list(request):
    """List or register users (admin only)."""
    if request.method == 'POST':
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = create_user(**serializer.validated_data)
        except (DuplicateUserError, InvalidStoreError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(UserSerializer(get_user(user_id=user.id)).data, status=status.HTTP_201_CREATED)

    return Response(UserSerializer(list_users(), many=True).data)


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer, 404: ErrorResponseSerializer},
    description="Get a single user.",
    tags=['users'],
)
@extend_schema(
    methods=['PATCH'],
    request=UserUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Update a user's name, role, home store or active flag.",
    tags=['users'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, pk):
    """Retrieve or update a user (admin only)."""
    if request.method == 'PATCH':
        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = update_user(user_id=pk, **serializer.validated_data)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidStoreError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(UserSerializer(user).data)

    try:
        user = get_user(user_id=pk)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(UserSerializer(user).data)
