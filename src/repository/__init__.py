"""Source-hosting API clients (GitHub, GitLab)."""
