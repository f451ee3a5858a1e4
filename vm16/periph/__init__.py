"""Character I/O devices."""
