# apps/auth/models.py

from decimal import Decimal

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from apps.core.utils import RandomUploadPath


class UserManager(BaseUserManager):
    """Manager for email-identified users"""
    
    use_in_migrations = True
    
    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email address is required')
        email = self.normalize_email(email).strip().lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user
    
    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)
    
    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Marketplace profile: a customer, a vendor or a platform admin"""
    
    ROLE_CUSTOMER = 'customer'
    ROLE_VENDOR = 'vendor'
    ROLE_ADMIN = 'admin'
    
    ROLE_CHOICES = [
        (ROLE_CUSTOMER, 'Customer'),
        (ROLE_VENDOR, 'Vendor'),
        (ROLE_ADMIN, 'Admin'),
    ]
    
    username = None
    first_name = None
    last_name = None
    
    # Basic Info
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    avatar = models.ImageField(upload_to=RandomUploadPath('avatars'), null=True, blank=True)
    
    # Marketplace role
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER, db_index=True)
    
    # Vendor payouts
    available_balance = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    bvn = models.CharField(max_length=11, blank=True)
    account_number = models.CharField(max_length=20, blank=True)
    account_name = models.CharField(max_length=150, blank=True)
    bank_name = models.CharField(max_length=100, blank=True)
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []
    
    objects = UserManager()
    
    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(available_balance__gte=0),
                name='user_available_balance_non_negative'
            ),
        ]
    
    def __str__(self):
        return f"{self.full_name} ({self.email})" if self.full_name else self.email
    
    def get_full_name(self):
        return self.full_name.strip()
    
    def get_short_name(self):
        return self.full_name.split(' ')[0] if self.full_name else self.email
    
    @property
    def is_platform_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser
    
    @property
    def is_vendor(self):
        """Vendors and admins may own stores"""
        return self.role in (self.ROLE_VENDOR, self.ROLE_ADMIN) or self.is_superuser
    