"""AuthGate: email and password authentication issuing signed session tokens."""
