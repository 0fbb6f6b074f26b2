from rest_framework import generics, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters
from drf_spectacular.utils import extend_schema

from authentication.permissions import IsAdminRoleOrReadOnly
from . import services
from .serializers import (
    CategorySerializer, CategoryWriteSerializer,
    MenuItemSerializer, MenuItemWriteSerializer
)

CATEGORY_FIELDS = ['name', 'description', 'is_active', 'sort_order']
MENU_ITEM_FIELDS = ['name', 'description', 'price', 'category_id', 'is_available']


def submitted_fields(data, allowed):
    """Pick the submitted values for the given fields out of request.data"""
    return {field: data[field] for field in allowed if field in data}


# Food Category Views
class CategoryListCreateView(generics.ListCreateAPIView):
    """
    get: List categories ordered by sort order, then name
    post: Create a new category (admins only)
    """
    serializer_class = CategorySerializer
    permission_classes = [IsAdminRoleOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['is_active']
    search_fields = ['name']

    def get_queryset(self):
        active_only = self.request.query_params.get('active_only', '').lower() == 'true'
        return services.list_categories(active_only=active_only)

    @extend_schema(request=CategoryWriteSerializer, responses={201: CategorySerializer})
    def post(self, request, *args, **kwargs):
        fields = submitted_fields(request.data, CATEGORY_FIELDS)
        category = services.create_category(
            request.user,
            name=fields.get('name', ''),
            description=fields.get('description'),
            is_active=fields.get('is_active', True),
            sort_order=fields.get('sort_order', 0),
        )
        return Response(
            CategorySerializer(services.get_category(category.pk)).data,
            status=status.HTTP_201_CREATED
        )


class CategoryRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get category details (authenticated users)
    put/patch: Update category (admins only)
    delete: Delete category with no menu items (admins only)
    """
    serializer_class = CategorySerializer
    permission_classes = [IsAdminRoleOrReadOnly]

    def get_object(self):
        return services.get_category(self.kwargs['pk'])

    @extend_schema(request=CategoryWriteSerializer, responses={200: CategorySerializer})
    def update(self, request, *args, **kwargs):
        category = services.update_category(
            request.user, self.kwargs['pk'], **submitted_fields(request.data, CATEGORY_FIELDS)
        )
        return Response(CategorySerializer(services.get_category(category.pk)).data)

    def destroy(self, request, *args, **kwargs):
        services.delete_category(request.user, self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)


# Menu Views
class MenuItemListCreateView(generics.ListCreateAPIView):
    """
    get: List all menu items with their category
    post: Create a new menu item (admins only, multipart for image upload)
    """
    serializer_class = MenuItemSerializer
    permission_classes = [IsAdminRoleOrReadOnly]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['is_available', 'category']
    search_fields = ['name', 'description']

    def get_queryset(self):
        available_only = self.request.query_params.get('available_only', '').lower() == 'true'
        return services.list_menu_items(available_only=available_only)

    @extend_schema(request=MenuItemWriteSerializer, responses={201: MenuItemSerializer})
    def post(self, request, *args, **kwargs):
        fields = submitted_fields(request.data, MENU_ITEM_FIELDS)
        item = services.create_menu_item(
            request.user,
            name=fields.get('name', ''),
            description=fields.get('description', ''),
            price=fields.get('price'),
            category_id=fields.get('category_id'),
            is_available=fields.get('is_available', True),
            image=request.FILES.get('image'),
        )
        return Response(MenuItemSerializer(item).data, status=status.HTTP_201_CREATED)


class MenuItemRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get menu item details (authenticated users)
    put/patch: Update menu item (admins only)
    delete: Delete menu item (admins only)
    """
    serializer_class = MenuItemSerializer
    permission_classes = [IsAdminRoleOrReadOnly]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_object(self):
        return services.get_menu_item(self.kwargs['pk'])

    @extend_schema(request=MenuItemWriteSerializer, responses={200: MenuItemSerializer})
    def update(self, request, *args, **kwargs):
        item = services.update_menu_item(
            request.user,
            self.kwargs['pk'],
            image=request.FILES.get('image'),
            **submitted_fields(request.data, MENU_ITEM_FIELDS)
        )
        return Response(MenuItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        services.delete_menu_item(request.user, self.kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    summary="Customer Menu",
    description="Available menu items with their category, ordered by name",
    responses={200: MenuItemSerializer(many=True)},
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def customer_menu(request):
    menu_items = services.list_menu_items(available_only=True)
    return Response(MenuItemSerializer(menu_items, many=True).data)
