"""
Use Cases

Organized into domain folders:
- auth/: Registration and login
- users/: Signed-in user context and profile
- tenants/: Acting-as-tenant switching
- admin/: Company overview, access flags, master privilege
- tables/: Tenant-scoped record CRUD
- export/: CSV export
- audit/: Audit logs

Import from subdirectories.
"""
