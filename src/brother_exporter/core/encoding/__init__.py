"""Output encoders for metric samples and log entries."""
