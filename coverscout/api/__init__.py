"""HTTP surface: routes, response schemas, and middleware."""
