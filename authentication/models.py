from django.db import models, transaction
from django.db.models import F
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
import uuid


class TimeStampedModel(models.Model):
    """Base model with created_at and updated_at fields"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# =============== LOCATION ===============
class LocationManager(models.Manager):
    SEQUENCE_FIELDS = ('order_sequence', 'menu_item_sequence')

    def next_sequence(self, location_id, counter):
        """
        Atomically advance one of the per-location counters and return the new value.

        The location row is locked for the rest of the caller's transaction, so two
        concurrent creates for the same location can never read the same number.
        """
        if counter not in self.SEQUENCE_FIELDS:
            raise ValueError(f"Unknown sequence counter: {counter}")

        with transaction.atomic(using=self.db):
            location = self.select_for_update().only('id', counter).get(pk=location_id)
            self.filter(pk=location.pk).update(**{counter: F(counter) + 1})
            return getattr(location, counter) + 1


class Location(TimeStampedModel):
    """A restaurant location; root of all location-scoped data"""
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    currency = models.CharField(max_length=10, default='LKR')
    location_type = models.CharField(max_length=100, blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')

    # Per-location counters, only ever advanced through LocationManager.next_sequence
    order_sequence = models.PositiveIntegerField(default=0, editable=False)
    menu_item_sequence = models.PositiveIntegerField(default=0, editable=False)

    objects = LocationManager()

    class Meta:
        db_table = 'locations'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


# =============== USERS ===============
class UserManager(BaseUserManager):
    def create_user(self, email, password=None, location=None, **extra_fields):
        if not email:
            raise ValueError('The Email field must be set')
        if location is None and not extra_fields.get('location_id'):
            raise ValueError('The Location must be set')
        if location is not None:
            extra_fields['location'] = location
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser):
    """Staff account; email is unique within a location"""
    ROLE_CHOICES = [
        ('admin', 'Admin'),
        ('manager', 'Manager'),
        ('staff', 'Staff'),
        ('kitchen_staff', 'Kitchen Staff'),
    ]

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('suspended', 'Suspended'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    location = models.ForeignKey(Location, on_delete=models.CASCADE, related_name='users')
    email = models.EmailField()
    name = models.CharField(max_length=255)
    contact_number = models.CharField(max_length=50, blank=True, null=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='staff')
    account_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['location', 'email'], name='users_location_email_unique'),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>"

    @property
    def is_active(self):
        return self.account_status == 'active'
