from decouple import config

# Bearer tokens are issued by the external identity provider and verified locally.
AUTH_PROVIDER_JWT_KEY = config("AUTH_PROVIDER_JWT_KEY", default="change-me")
AUTH_PROVIDER_JWT_ALGORITHM = config("AUTH_PROVIDER_JWT_ALGORITHM", default="HS256")
AUTH_PROVIDER_JWT_AUDIENCE = config("AUTH_PROVIDER_JWT_AUDIENCE", default="")
AUTH_PROVIDER_JWT_ISSUER = config("AUTH_PROVIDER_JWT_ISSUER", default="")

# Server-side profile API, used to look up the email address of users we only know by subject.
AUTH_PROVIDER_API_URL = config("AUTH_PROVIDER_API_URL", default="https://api.clerk.com/v1")
AUTH_PROVIDER_SECRET_KEY = config("AUTH_PROVIDER_SECRET_KEY", default="")
AUTH_PROVIDER_TIMEOUT = config("AUTH_PROVIDER_TIMEOUT", default=10.0, cast=float)


NINJA_EXTRA = {
    "THROTTLE_RATES": {
        "user": "1000/day",
        "anon": "250/day",
    },
    "NUM_PROXIES": None,
}
