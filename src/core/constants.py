"""Core application constants."""

# Time constants
SECONDS_PER_DAY = 86_400

# Security and redaction
REDACTED = "[REDACTED]"
DEFAULT_HSTS_MAX_AGE = 31536000  # 1 year in seconds

# MFA
MFA_ISSUER = "Governança de Dados"
MFA_CODE_DIGITS = 6
MFA_CODE_TTL_MINUTES = 10
MFA_BACKUP_CODE_COUNT = 8
TOTP_STEP_SECONDS = 30
TOTP_WINDOW = 1
MASKED_SECRET = "***OCULTO***"
