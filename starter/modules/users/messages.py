"""
User-facing messages returned in DataResult.message.
"""

USERNAME_ALREADY_EXIST = "Username already exists"
EMAIL_ALREADY_EXIST = "Email already exists"
SIGN_UP_FAILED = "Sign up failed"
SIGN_UP_SUCCESSFULLY = "Sign up successful. Please verify your email: "
USER_NOT_FOUND = "User not found"
EMAIL_ALREADY_CONFIRMED = "Email is already confirmed"
INVALID_VERIFICATION_TOKEN = "Invalid verification token"
EMAIL_CONFIRMED = "Email confirmed"
