from rest_framework_simplejwt.authentication import JWTAuthentication
from django.conf import settings


class CookieJWTAuthentication(JWTAuthentication):
    """
    Custom JWT authentication that checks for tokens in cookies.
    Looks for the access token in the access cookie and falls back to the
    standard ``Authorization: Bearer`` header if no cookie is present.
    """

    def authenticate(self, request):
        access_token = request.COOKIES.get(
            getattr(settings, "JWT_AUTH_COOKIE", "access_token")
        )

        if access_token:
            validated_token = self.get_validated_token(access_token)
            return self.get_user(validated_token), validated_token

        return super().authenticate(request)
