from rest_framework import status, generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from authentication.permissions import is_admin
from . import services
from .serializers import OrderCreateSerializer, OrderReadSerializer, OrderStatusSerializer


class OrderListCreateView(generics.ListCreateAPIView):
    """
    get: Admins list every order, other users only their own; newest first
    post: Place an order from a cart snapshot
    """
    serializer_class = OrderReadSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return services.list_orders(
            self.request.user,
            status=self.request.query_params.get('status')
        )

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['include_user'] = is_admin(self.request.user)
        return context

    @extend_schema(
        parameters=[
            OpenApiParameter('status', OpenApiTypes.STR, OpenApiParameter.QUERY, description="Filter by order status"),
        ]
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        summary="Place Order",
        request=OrderCreateSerializer,
        responses={201: OrderReadSerializer, 400: {'description': 'Invalid line items'}},
        examples=[
            OpenApiExample(
                'Espresso and croissant',
                value={
                    "items": [
                        {"name": "Espresso", "quantity": 2, "price": "3.50"},
                        {"name": "Croissant", "quantity": 1, "price": "4.00"}
                    ],
                    "notes": "Extra sugar please"
                }
            )
        ]
    )
    def post(self, request, *args, **kwargs):
        order = services.place_order(
            request.user,
            request.data.get('items', []),
            notes=request.data.get('notes'),
        )
        order = services.get_order(order.pk, request.user)
        return Response(OrderReadSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(generics.RetrieveAPIView):
    """Retrieve a specific order (owner or admin)"""
    serializer_class = OrderReadSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return services.get_order(self.kwargs['pk'], self.request.user)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['include_user'] = is_admin(self.request.user)
        return context


@extend_schema(
    summary="Update Order Status",
    description="Admins only. Status is one of pending, processing, completed, cancelled.",
    request=OrderStatusSerializer,
    responses={
        200: OrderReadSerializer,
        400: {'description': 'Unknown status'},
        403: {'description': 'Only administrators can update orders'},
        404: {'description': 'Order not found'},
    }
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_order_status(request, pk):
    serializer = OrderStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    order = services.update_status(pk, serializer.validated_data['status'], request.user)
    order = services.get_order(order.pk, request.user)
    return Response(OrderReadSerializer(order, context={'include_user': True}).data)


@extend_schema(
    summary="Recent Orders",
    description="The current user's five latest orders, for the dashboard",
    responses={200: OrderReadSerializer(many=True)},
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def recent_orders(request):
    orders = services.recent_orders(request.user)
    return Response(OrderReadSerializer(orders, many=True).data)
