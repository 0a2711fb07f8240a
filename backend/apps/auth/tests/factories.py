import factory
from django.contrib.auth import get_user_model

User = get_user_model()

DEFAULT_PASSWORD = 'secret123'


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
    
    email = factory.Sequence(lambda n: f'user{n}@example.com')
    full_name = factory.Faker('name')
    phone = '+2348031234567'
    role = User.ROLE_CUSTOMER
    password = factory.django.Password(DEFAULT_PASSWORD)


class VendorFactory(UserFactory):
    role = User.ROLE_VENDOR
    bank_name = 'Access Bank'
    account_number = '0123456789'
    account_name = factory.SelfAttribute('full_name')


class AdminFactory(UserFactory):
    role = User.ROLE_ADMIN
