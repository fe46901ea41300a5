"""Feature packages: path resolution, writers, archival, sinks."""
