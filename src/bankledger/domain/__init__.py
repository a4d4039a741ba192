"""Domain layer for bankledger application.

Services are imported from their own modules; this package stays empty so
the storage layer can import entities without pulling in the services.
"""
