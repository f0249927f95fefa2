"""Service layer orchestrating transports."""
