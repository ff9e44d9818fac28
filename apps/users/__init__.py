"""Users app package.

Defines the custom user model with a single marketplace role (customer,
property owner, car owner, tour operator, transfer provider, admin) and
the JWT authentication endpoints. Use ``apps.users.models.CustomUser`` as
the AUTH_USER_MODEL throughout the project.
"""
