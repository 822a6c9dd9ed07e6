"""Provider clients for GitHub, Slack and Jira."""
