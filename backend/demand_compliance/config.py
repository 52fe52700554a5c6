"""
Demand Compliance - Configuration
Environment-driven settings. Read once at import time.
"""
import os

# Auth
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "demand-compliance-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))

# Approval workflow gate: minimum score a letter needs before attorney review
COMPLIANCE_REVIEW_THRESHOLD = int(os.getenv("COMPLIANCE_REVIEW_THRESHOLD", "100"))

# Statute of limitations (years) assumed for jurisdictions missing from the state table
DEFAULT_STATUTE_OF_LIMITATIONS_YEARS = int(os.getenv("DEFAULT_STATUTE_OF_LIMITATIONS_YEARS", "6"))

# Regulation F contact window is judged in the debtor's timezone; used when none is known
DEFAULT_DEBTOR_TIMEZONE = os.getenv("DEFAULT_DEBTOR_TIMEZONE", "America/New_York")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
