"""
auth — User authentication module.

Provides:
  • JWT token creation & verification
  • Password hashing (bcrypt)
  • Register / Login API routes
  • ``get_current_claims`` FastAPI dependency (the bearer token gate)
"""
