from decimal import Decimal

import factory

from apps.auth.tests.factories import UserFactory
from apps.ecommerce.models import (
    Cart, CartItem, Category, Order, OrderItem, PaymentTransaction, Product, Review,
)
from apps.stores.tests.factories import StoreFactory


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category
    
    name = factory.Sequence(lambda n: f'Category {n}')
    description = factory.Faker('sentence')


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product
    
    store = factory.SubFactory(StoreFactory)
    category = factory.SubFactory(CategoryFactory)
    name = factory.Sequence(lambda n: f'Product {n}')
    description = factory.Faker('paragraph')
    price = Decimal('2500.00')
    stock_quantity = 10
    is_active = True


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review
    
    product = factory.SubFactory(ProductFactory)
    customer = factory.SubFactory(UserFactory)
    rating = 4
    comment = factory.Faker('sentence')


class CartFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Cart
    
    user = factory.SubFactory(UserFactory)


class CartItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = CartItem
    
    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory(ProductFactory)
    quantity = 1


class PaymentTransactionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PaymentTransaction
    
    reference = factory.Sequence(lambda n: f'LXP-TEST{n:05d}')
    provider = Order.PaymentMethod.PAYSTACK
    customer = factory.SubFactory(UserFactory)
    amount = Decimal('5000.00')


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order
    
    customer = factory.SubFactory(UserFactory)
    store = factory.SubFactory(StoreFactory)
    total_amount = Decimal('5000.00')
    payment_method = Order.PaymentMethod.PAYSTACK
    payment_reference = factory.Sequence(lambda n: f'LXP-ORDER{n:05d}')
    shipping_address = factory.LazyAttribute(lambda o: {
        'full_name': 'Test Customer',
        'phone': '+2348031234567',
        'address': '12 Allen Avenue',
        'city': 'Ikeja',
        'state': 'Lagos',
    })


class OrderItemFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = OrderItem
    
    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory(ProductFactory, store=factory.SelfAttribute('..order.store'))
    product_name = factory.SelfAttribute('product.name')
    quantity = 2
    price = factory.SelfAttribute('product.price')
