"""Service layer for the AuthGate API."""
