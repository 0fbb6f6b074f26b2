from rest_framework import serializers
from decimal import Decimal

from authentication.serializers import UserSerializer
from .models import Order, OrderItem, round_currency


class OrderItemSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=12, decimal_places=4, min_value=Decimal('0.00'))
    line_total = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ['name', 'quantity', 'price', 'line_total']

    def get_line_total(self, obj):
        return str(round_currency(obj.line_total))


class OrderCreateSerializer(serializers.Serializer):
    items = OrderItemSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate_notes(self, value):
        return value or None


class OrderReadSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    user = serializers.SerializerMethodField()
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'user_id', 'user', 'items', 'total_amount', 'status',
            'status_display', 'notes', 'created_at', 'updated_at'
        ]

    def get_user(self, obj):
        # Owner details only accompany the admin listing
        if self.context.get('include_user'):
            return UserSerializer(obj.user).data
        return None


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
