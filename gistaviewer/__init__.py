"""Client core for browsing, starring, and commenting on GitHub Gists."""
