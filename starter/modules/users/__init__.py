"""
User Authentication Module

- domain: users, roles, request/response models, results
- repositories: data access
- services: password hashing, confirmation tokens, mail
- handlers: sign-up, email confirmation, user lookup (intercepted operations)
- api: REST endpoints
"""
