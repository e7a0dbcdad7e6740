"""Inventory and business-management CRUD backend."""
