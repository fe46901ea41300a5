"""Platform adapters (diagnostics logging)."""
