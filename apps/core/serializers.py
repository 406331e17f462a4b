from rest_framework import serializers
from django.contrib.auth import get_user_model


User = get_user_model()


class TimestampedModelSerializer(serializers.ModelSerializer):
    class Meta:
        abstract = True

    created_at = serializers.DateTimeField(read_only=True, required=False)
    updated_at = serializers.DateTimeField(read_only=True, required=False)


class UserShortSerializer(serializers.ModelSerializer):
    """Serializer for a short representation of the user."""

    full_name = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "full_name"]

    def get_full_name(self, obj) -> str:
        return obj.get_full_name() or obj.get_username()
