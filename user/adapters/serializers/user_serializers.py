from rest_framework import serializers
from django.contrib.auth.models import User
from user.models import Role
from user.selectors import display_name, email_taken, role_of


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True, trim_whitespace=False)

    def validate_email(self, value):
        if email_taken(value):
            raise serializers.ValidationError("User already exists")
        return value.strip().lower()


class UserCreateSerializer(RegisterSerializer):
    role = serializers.ChoiceField(choices=Role.choices, default=Role.USER)


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False)


class UserProjectionSerializer(serializers.ModelSerializer):
    """The only shape in which users appear inside task payloads."""
    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'name', 'email')

    def get_name(self, obj):
        return display_name(obj)


class UserSerializer(UserProjectionSerializer):
    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'role', 'date_joined')

    def get_role(self, obj):
        return role_of(obj)
