"""AdmitGuard HTTP service."""
