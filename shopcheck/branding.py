"""Command naming used by the CLI."""

CLI_PRIMARY_COMMAND = "shopcheck"
