"""Application layer: interfaces (ports), DTOs and services.

Services depend on domain types and on the Protocols in
application.interfaces; infrastructure implements those protocols.
"""
