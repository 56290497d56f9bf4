"""Domain services: authentication, users, catalog and vehicles."""
