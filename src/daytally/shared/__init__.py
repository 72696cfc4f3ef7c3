"""Types shared by the domain, CLI and API layers."""
