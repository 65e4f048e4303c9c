"""Tenancy bounded context.

Onboards new tenants by creating matching state in the identity provider
and in the local store, with compensation when any step fails.
"""
