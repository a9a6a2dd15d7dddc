"""Shell adapters — subprocess-backed tool execution."""
