"""Entities and repository contracts. Framework-free so every layer can use them."""
