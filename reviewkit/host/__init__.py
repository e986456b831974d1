"""Host side: reading a project from disk and parsing it into engine inputs."""
