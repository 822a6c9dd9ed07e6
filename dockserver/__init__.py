"""HTTP server for agentdock: agent registry, tool gateway, queries and logs."""
