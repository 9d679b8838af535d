"""
Service layer abstraction.

Each service encapsulates the business rules of one domain and talks
to the store through the ``ConnectionPool`` it is handed, so API
handlers stay free of SQL.
"""
