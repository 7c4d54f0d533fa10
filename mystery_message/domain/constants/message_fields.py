"""Constants for embedded Message field names"""


class MessageFields:
    """Field name constants for Message sub-documents"""
    CONTENT = "content"
    CREATED_AT = "createdAt"

    # MongoDB specific
    MONGO_ID = "_id"
