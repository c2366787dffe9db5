CREDENTIAL_ALGORITHM = "HS256"
CREDENTIAL_TTL_SECONDS = 600

# Claims set by the issuer; callers may not supply them.
RESERVED_CLAIMS = frozenset({"exp", "iat"})
