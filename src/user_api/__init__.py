"""User API - CRUD service for user documents stored in Azure Cosmos DB."""

__version__ = "0.1.0"
