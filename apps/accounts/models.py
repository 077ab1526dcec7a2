from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
import uuid

from apps.prices.models import Currency


class UserRole(models.TextChoices):
    USER = 'user', 'User'
    ADMIN = 'admin', 'Admin'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        extra_fields.setdefault('username', email.split('@')[0])
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Account owning items, stores, categories and shopping lists."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    username = models.CharField(max_length=50, unique=True)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True, db_index=True)
    age = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(13), MaxValueValidator(120)]
    )
    role = models.CharField(max_length=10, choices=UserRole.choices, default=UserRole.USER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return 'first last', falling back to the username."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.username

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN or self.is_superuser

    def deactivate(self):
        """Soft-delete the account; owned data is kept."""
        self.is_active = False
        self.set_unusable_password()
        self.save(update_fields=['is_active', 'password', 'updated_at'])


class UserPreferences(models.Model):
    """Per-user defaults used when recording prices and sending alerts."""

    DEFAULTS = {
        'currency': Currency.EUR,
        'location': '',
        'notification_enabled': True,
        'email_alerts': False,
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='preferences')
    currency = models.CharField(max_length=3, choices=Currency.choices, default=Currency.EUR)
    location = models.CharField(max_length=100, blank=True)
    notification_enabled = models.BooleanField(default=True)
    email_alerts = models.BooleanField(default=False)
    preferred_stores = models.ManyToManyField('stores.Store', blank=True, related_name='preferred_by')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_preferences'

    def __str__(self):
        return f"Preferences of {self.user.email}"

    @classmethod
    def ensure_for(cls, user):
        """Get or create the preferences row for a user."""
        preferences, _ = cls.objects.get_or_create(user=user)
        return preferences

    def reset_to_defaults(self):
        for field, value in self.DEFAULTS.items():
            setattr(self, field, value)
        self.save()
        self.preferred_stores.clear()
