from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension


class CookieJWTAuthenticationExtension(OpenApiAuthenticationExtension):
    # This MUST match the path to the authentication class
    target_class = "apps.core.authentication.CookieJWTAuthentication"
    name = "jwtAuth"

    def get_security_definition(self, auto_schema):
        # Bearer header is the primary transport, the cookie is a fallback
        cookie_name = getattr(settings, "JWT_AUTH_COOKIE", "access_token")
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": f"Access token, also accepted in the '{cookie_name}' cookie",
        }
