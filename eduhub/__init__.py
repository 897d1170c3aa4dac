"""eduhub: multi-tenant education management API."""
