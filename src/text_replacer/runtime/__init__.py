"""Runtime services (telemetry and its environment configuration)."""
