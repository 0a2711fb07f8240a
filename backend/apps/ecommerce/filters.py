import django_filters
from django.db.models import Q

from .models import Order, Product


class ProductFilter(django_filters.FilterSet):
    """Filter for storefront products"""
    
    category = django_filters.CharFilter(
        method='filter_category',
        label='Category id or name'
    )
    
    store = django_filters.CharFilter(
        method='filter_store',
        label='Store id or name'
    )
    
    price_min = django_filters.NumberFilter(
        field_name='price',
        lookup_expr='gte',
        label='Min Price'
    )
    
    price_max = django_filters.NumberFilter(
        field_name='price',
        lookup_expr='lte',
        label='Max Price'
    )
    
    in_stock = django_filters.BooleanFilter(
        method='filter_in_stock',
        label='In Stock'
    )
    
    q = django_filters.CharFilter(
        method='filter_search',
        label='Search'
    )
    
    class Meta:
        model = Product
        fields = ['category', 'store', 'price_min', 'price_max', 'in_stock', 'q']
    
    def filter_category(self, queryset, name, value):
        if value.isdecimal():
            return queryset.filter(category_id=int(value))
        return queryset.filter(category__name__iexact=value)
    
    def filter_store(self, queryset, name, value):
        if value.isdecimal():
            return queryset.filter(store_id=int(value))
        return queryset.filter(store__name__iexact=value)
    
    def filter_in_stock(self, queryset, name, value):
        if value:
            return queryset.in_stock()
        return queryset.filter(stock_quantity=0)
    
    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))


class OrderFilter(django_filters.FilterSet):
    """Filter for orders"""
    
    status = django_filters.ChoiceFilter(choices=Order.Status.choices)
    payment_status = django_filters.ChoiceFilter(choices=Order.PaymentStatus.choices)
    payment_method = django_filters.ChoiceFilter(choices=Order.PaymentMethod.choices)
    store = django_filters.NumberFilter(field_name='store_id')
    reference = django_filters.CharFilter(field_name='payment_reference')
    created_after = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='gte')
    created_before = django_filters.DateTimeFilter(field_name='created_at', lookup_expr='lte')
    
    class Meta:
        model = Order
        fields = ['status', 'payment_status', 'payment_method', 'store', 'reference']
