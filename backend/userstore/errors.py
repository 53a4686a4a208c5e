class UserStoreError(Exception):
    """Base error for the user store."""


class DatabaseConnectionError(UserStoreError):
    """The database could not be reached, the table could not be created,
    or the store was already closed."""


class QueryError(UserStoreError):
    pass
