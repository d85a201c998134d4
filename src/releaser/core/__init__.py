"""Core services: configuration, GitHub API, git and the artifact manifest."""
