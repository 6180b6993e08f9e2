"""
TenantNotes Backend - Multi-tenant note taking API

Organizations (tenants) register, invite their team and keep notes,
with free/pro subscription plans governing what each tenant may do.
"""

__version__ = "1.0.0"
