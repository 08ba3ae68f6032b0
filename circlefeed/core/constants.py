"""Global constants for the circlefeed application."""

# Collection names
USERS_COLLECTION = "users"
GROUPS_COLLECTION = "groups"
POSTS_COLLECTION = "posts"
NOTES_COLLECTION = "notes"
LINKS_COLLECTION = "links"
FRIENDSHIPS_COLLECTION = "friendships"

# Timestamp fields present on every document
CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"

# Firestore limits
FIRESTORE_BATCH_LIMIT = 400
FIRESTORE_IN_LIMIT = 30

# Placeholders for ids that no longer resolve
DELETED_GROUP = "DELETED_GROUP"
DELETED_USER = "DELETED_USER"

# Friendship states
STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
