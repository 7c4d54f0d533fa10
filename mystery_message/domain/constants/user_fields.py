"""Constants for User model field names"""


class UserFields:
    """Field name constants for User model (stored camelCase)"""
    USERNAME = "username"
    EMAIL = "email"
    PASSWORD = "password"  # bcrypt hash, never plaintext
    VERIFY_CODE = "verifyCode"
    VERIFY_CODE_EXPIRY = "verifyCodeExpiry"
    IS_VERIFIED = "isVerified"
    IS_ACCEPTING_MESSAGES = "isAcceptingMessages"
    MESSAGES = "messages"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
