"""Settings, security primitives and shared exceptions."""
