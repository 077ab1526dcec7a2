from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserPreferences


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'username',
            'first_name',
            'last_name',
            'age',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'role', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user registration."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    username = serializers.CharField(max_length=50, required=False, allow_blank=True)

    class Meta:
        model = User
        fields = [
            'email', 'password', 'password_confirm',
            'username', 'first_name', 'last_name', 'age',
        ]

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class DeleteAccountSerializer(serializers.Serializer):
    password = serializers.CharField(required=True, style={'input_type': 'password'})
    confirm = serializers.BooleanField(required=True)

    def validate_confirm(self, value):
        if not value:
            raise serializers.ValidationError('Confirmation required')
        return value


class UserPreferencesSerializer(serializers.ModelSerializer):
    """Read/update serializer for preferences; preferred stores are read-only here."""

    preferred_stores = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = UserPreferences
        fields = [
            'currency',
            'location',
            'notification_enabled',
            'email_alerts',
            'preferred_stores',
            'updated_at',
        ]
        read_only_fields = ['preferred_stores', 'updated_at']


class PreferredStoreToggleSerializer(serializers.Serializer):
    store_id = serializers.UUIDField()
