"""
auth — User authentication module.

Provides:
  • Registration payload validation
  • Password hashing (unsalted SHA-256, kept for compatibility)
  • In-process login sessions keyed by an opaque cookie token
  • Registration / login / current-user API routes
"""
